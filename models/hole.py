from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class Hole(BaseGolfModel):
    """A single hole of a round: par and stroke index (1 = hardest)."""

    number: int = Field(..., ge=1, le=18)
    par: int = Field(4, ge=3, le=6)
    stroke_index: Optional[int] = Field(None, ge=1, le=18)
    yardage: Optional[int] = Field(None, ge=0)

    def effective_stroke_index(self, position: int) -> int:
        """Stroke index, falling back to the hole's ordinal position when unset."""
        if self.stroke_index is not None:
            return self.stroke_index
        return position
