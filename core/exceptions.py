from fastapi import HTTPException, status


class TournamentException(HTTPException):
    def __init__(self, detail: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=detail)


class InvalidPairing(TournamentException):
    def __init__(self, participant_id: int):
        self.participant_id = participant_id
        super().__init__("A participant cannot play against themselves")


class DuplicatePairing(TournamentException):
    def __init__(self, player1: str, player2: str):
        self.player1 = player1
        self.player2 = player2
        super().__init__(
            f"{player1} and {player2} have already played against each other.",
            status.HTTP_409_CONFLICT,
        )


class StoreUnavailable(TournamentException):
    def __init__(self, reason: str = "Store request failed"):
        super().__init__(f"Store unavailable: {reason}", status.HTTP_503_SERVICE_UNAVAILABLE)


class InvalidMove(TournamentException):
    def __init__(self, move):
        self.move = move
        super().__init__(f"Invalid move: {move!r} (expected rock, paper or scissors)")


class ParticipantNotFound(TournamentException):
    def __init__(self, participant_id: int):
        self.participant_id = participant_id
        super().__init__(f"Participant {participant_id} not found", status.HTTP_404_NOT_FOUND)


class MatchNotFound(TournamentException):
    def __init__(self, match_id: int):
        self.match_id = match_id
        super().__init__(f"Match {match_id} not found", status.HTTP_404_NOT_FOUND)


class EmptyRoster(TournamentException):
    def __init__(self):
        super().__init__("Roster contains no participant names")
