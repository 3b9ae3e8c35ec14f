"""
Position model for the compass tic-tac-toe board.
"""
from dataclasses import dataclass, field

from .enums import Location, Mark


@dataclass
class Position:
    """
    Represents a single cell on the board.

    Attributes:
        location: Compass identifier of the cell, fixed for the board's lifetime
        mark: Current occupant, Mark.EMPTY until claimed
    """
    location: Location
    mark: Mark = field(default=Mark.EMPTY)

    def __post_init__(self):
        """Validate position parameters."""
        if not isinstance(self.location, Location):
            raise ValueError(f"Location must be a Location enum, got {type(self.location)}")
        if not isinstance(self.mark, Mark):
            raise ValueError(f"Mark must be a Mark enum, got {type(self.mark)}")

    def is_empty(self) -> bool:
        """Check if the position is empty."""
        return self.mark is Mark.EMPTY

    def is_marked_by(self, mark: Mark) -> bool:
        """Check if the position holds a specific mark."""
        return self.mark is mark
