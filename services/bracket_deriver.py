"""
Elimination tree derivation.

Rebuilds who was knocked out when, and by whom, from the chronological
match log. Everything here is a read-only projection: the inputs are never
mutated and nothing is cached between calls, so the result always reflects
the match log exactly as passed in.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from models.match import Move
from services.outcome_engine import to_move


@dataclass
class EliminationEntry:
    participant_id: int
    name: str
    round: Optional[int] = None  # None for survivors
    wins: int = 0
    losses: int = 0
    ties: int = 0
    eliminated_by_match_id: Optional[int] = None
    eliminated_by: Optional[str] = None  # name of the winner of the eliminating match

    @property
    def is_survivor(self) -> bool:
        return self.round is None

    @property
    def record(self) -> str:
        return f"{self.wins}W-{self.losses}L-{self.ties}T"


@dataclass
class EliminationEdge:
    loser_id: int
    winner_id: int
    match_id: Optional[int]
    loser_move: Move
    winner_move: Move
    position: int  # index in the chronological match log
    player1_move: Move
    player2_move: Move


@dataclass
class TieLink:
    player1_id: int
    player2_id: int
    match_id: Optional[int]
    move: Move
    position: int


@dataclass
class Bracket:
    elimination_rounds: Dict[int, List[EliminationEntry]] = field(default_factory=dict)
    survivors: List[EliminationEntry] = field(default_factory=list)
    edges: List[EliminationEdge] = field(default_factory=list)
    tie_links: List[TieLink] = field(default_factory=list)

    @property
    def round_count(self) -> int:
        return len(self.elimination_rounds)

    def entries(self) -> List[EliminationEntry]:
        """Survivors first, then eliminated participants by round"""
        eliminated = [
            entry
            for round_index in sorted(self.elimination_rounds)
            for entry in self.elimination_rounds[round_index]
        ]
        return self.survivors + eliminated


def sort_chronologically(matches: Iterable) -> list:
    # sorted() is stable, so equal timestamps keep their log order
    return sorted(matches, key=lambda match: match.created_at)


def _index_by_participant(matches: list) -> Dict[int, list]:
    index = defaultdict(list)
    for match in matches:
        index[match.player1_id].append(match)
        if match.player2_id != match.player1_id:
            index[match.player2_id].append(match)
    return index


def _tally(entry: EliminationEntry, matches: list):
    for match in matches:
        if match.is_tie:
            entry.ties += 1
        elif match.winner_id == entry.participant_id:
            entry.wins += 1
        else:
            entry.losses += 1


def _winner_move(match) -> Move:
    return to_move(match.player1_choice if match.winner_id == match.player1_id else match.player2_choice)


def _loser_move(match) -> Move:
    return to_move(match.player2_choice if match.winner_id == match.player1_id else match.player1_choice)


def derive_bracket(participants: Iterable, matches: Iterable) -> Bracket:
    """
    Derive elimination rounds, survivors and the loser -> winner graph.

    Each participant's first loss, in chronological order of decisive matches,
    takes the next round index. Ties never eliminate anyone and do not consume
    a round. A participant already eliminated who loses again keeps their
    original round; the extra loss only shows up in their tally.
    """
    roster = list({participant.id: participant for participant in participants}.values())
    ordered = sort_chronologically(matches)
    by_participant = _index_by_participant(ordered)

    entries: Dict[int, EliminationEntry] = {}
    for participant in roster:
        entry = EliminationEntry(participant_id=participant.id, name=participant.name)
        _tally(entry, by_participant.get(participant.id, []))
        entries[participant.id] = entry

    bracket = Bracket()
    current_round = 0

    for position, match in enumerate(ordered):
        if match.is_tie:
            bracket.tie_links.append(TieLink(
                player1_id=match.player1_id,
                player2_id=match.player2_id,
                match_id=match.id,
                move=to_move(match.player1_choice),
                position=position,
            ))
            continue

        loser_id = match.loser_id
        bracket.edges.append(EliminationEdge(
            loser_id=loser_id,
            winner_id=match.winner_id,
            match_id=match.id,
            loser_move=_loser_move(match),
            winner_move=_winner_move(match),
            position=position,
            player1_move=to_move(match.player1_choice),
            player2_move=to_move(match.player2_choice),
        ))

        entry = entries.get(loser_id)
        if entry is None or entry.round is not None:
            continue

        entry.round = current_round
        entry.eliminated_by_match_id = match.id
        entry.eliminated_by = match.winner_name
        bracket.elimination_rounds.setdefault(current_round, []).append(entry)
        current_round += 1

    bracket.survivors = [entries[p.id] for p in roster if entries[p.id].round is None]
    return bracket
