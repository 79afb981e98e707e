from services.exceptions import MembershipError, NotFoundError, RoundStateError, ScoringError
from services.tour_service import TourService

__all__ = [
    "TourService",
    "ScoringError",
    "NotFoundError",
    "MembershipError",
    "RoundStateError",
]
