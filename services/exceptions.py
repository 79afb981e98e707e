class ScoringError(Exception):
    """Base for all errors raised at the tour/service boundary."""


class NotFoundError(ScoringError):
    """Tour, round, player, team or match not found."""

    def __init__(self, entity: str, entity_id: str = ""):
        self.entity = entity
        self.entity_id = entity_id
        message = f"{entity} not found" if not entity_id else f"{entity} '{entity_id}' not found"
        super().__init__(message)


class MembershipError(ScoringError):
    """Player is not on the team, or not playing in the match."""


class RoundStateError(ScoringError):
    """Operation not allowed for the round's status or format."""
