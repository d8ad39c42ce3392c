"""
Flow-chart layout for the elimination tree.

Survivors sit on the top row; every elimination round gets its own row below,
and edges run from loser to winner. Positions are in chart pixels.
"""
from typing import Dict, List

from services.bracket_deriver import Bracket, EliminationEntry

CHART_WIDTH = 1200
CHART_HEIGHT = 700
NODE_HALF_WIDTH = 60
MIN_ROWS = 5

SURVIVOR = "survivor"
ELIMINATED = "eliminated"


def _row_height(round_count: int) -> float:
    return CHART_HEIGHT / max(round_count + 3, MIN_ROWS)


def _column_x(index: int, row_size: int) -> float:
    return (CHART_WIDTH / (row_size + 1)) * (index + 1) - NODE_HALF_WIDTH


def _node(entry: EliminationEntry, x: float, y: float) -> dict:
    node = {
        "id": entry.participant_id,
        "label": entry.name,
        "kind": SURVIVOR if entry.is_survivor else ELIMINATED,
        "x": x,
        "y": y,
        "wins": entry.wins,
        "losses": entry.losses,
        "ties": entry.ties,
        "record": entry.record,
        "round": None,
        "lost_to": None,
    }
    if not entry.is_survivor:
        # Rounds are displayed 1-based
        node["round"] = entry.round + 1
        node["lost_to"] = entry.eliminated_by
    return node


def build_chart(bracket: Bracket) -> Dict[str, List[dict]]:
    """Lay out nodes by elimination round and collect elimination and tie edges"""
    if not bracket.survivors and not bracket.elimination_rounds:
        return {"nodes": [], "edges": []}

    row_height = _row_height(bracket.round_count)
    nodes = []

    for index, entry in enumerate(bracket.survivors):
        nodes.append(_node(entry, _column_x(index, len(bracket.survivors)), row_height * 0.5))

    for round_index in sorted(bracket.elimination_rounds):
        row = bracket.elimination_rounds[round_index]
        for index, entry in enumerate(row):
            nodes.append(_node(entry, _column_x(index, len(row)), row_height * (round_index + 2)))

    # Edge ids follow the position of the match in the chronological log
    links = [
        (edge.position, {
            "id": f"elimination-{edge.position}",
            "kind": "elimination",
            "source": edge.loser_id,
            "target": edge.winner_id,
            "match_id": edge.match_id,
            "moves": [edge.player1_move.value, edge.player2_move.value],
        })
        for edge in bracket.edges
    ]
    links += [
        (link.position, {
            "id": f"tie-{link.position}",
            "kind": "tie",
            "source": link.player1_id,
            "target": link.player2_id,
            "match_id": link.match_id,
            "moves": [link.move.value, link.move.value],
        })
        for link in bracket.tie_links
    ]
    edges = [edge for _, edge in sorted(links, key=lambda item: item[0])]

    return {"nodes": nodes, "edges": edges}
