"""
Move model for compass tic-tac-toe.
"""
from dataclasses import dataclass
import time

from .enums import Location, Mark


@dataclass
class Move:
    """
    Represents a mark placed on the board.

    Attributes:
        location: Where the mark was placed
        mark: Which side placed it
        timestamp: Time when the move was made
    """
    location: Location
    mark: Mark
    timestamp: float = None

    def __post_init__(self):
        """Set timestamp if not provided and validate parameters."""
        if self.timestamp is None:
            self.timestamp = time.time()

        if not isinstance(self.location, Location):
            raise ValueError(f"Location must be a Location enum, got {type(self.location)}")

        if self.mark is Mark.EMPTY or not isinstance(self.mark, Mark):
            raise ValueError(f"Move must place PLAYER1 or PLAYER2, got {self.mark!r}")

    def __str__(self) -> str:
        return f"{self.mark.value} -> {self.location.value}"
