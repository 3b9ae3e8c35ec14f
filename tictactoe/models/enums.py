"""
Core enums for the compass tic-tac-toe game.
"""
from enum import Enum

from .errors import InvalidLocation


class Mark(Enum):
    """Occupancy of a single position. Values are the display glyphs."""
    EMPTY = ' '
    PLAYER1 = 'x'
    PLAYER2 = 'o'

    def opponent(self) -> 'Mark':
        """Get the opposing side's mark."""
        if self is Mark.PLAYER1:
            return Mark.PLAYER2
        if self is Mark.PLAYER2:
            return Mark.PLAYER1
        raise ValueError("EMPTY has no opponent")

    @property
    def glyph(self) -> str:
        return self.value


class Location(Enum):
    """The nine cells of the board, named by compass direction (c = centre)."""
    NW = 'nw'
    N = 'n'
    NE = 'ne'
    W = 'w'
    C = 'c'
    E = 'e'
    SW = 'sw'
    S = 's'
    SE = 'se'

    @classmethod
    def parse(cls, text) -> 'Location':
        """
        Parse a location identifier such as 'nw' or ' C '.

        Raises:
            InvalidLocation: If the text is not one of the nine identifiers
        """
        if isinstance(text, Location):
            return text
        try:
            return cls(str(text).strip().lower())
        except ValueError:
            raise InvalidLocation(text) from None

    def is_corner(self) -> bool:
        return self in CORNERS

    def is_edge(self) -> bool:
        return self in EDGES

    def is_center(self) -> bool:
        return self is Location.C


# Corners in the order the opponent draws from them
CORNERS = (Location.NW, Location.SW, Location.NE, Location.SE)
EDGES = (Location.N, Location.S, Location.E, Location.W)
CENTER = Location.C


class GameStatus(Enum):
    """Represents the current state of the game."""
    IN_PROGRESS = 'in_progress'
    ENDED = 'ended'


class Turn(Enum):
    """Whose move it is."""
    HUMAN = 'human'
    OPPONENT = 'opponent'

    def next(self) -> 'Turn':
        return Turn.OPPONENT if self is Turn.HUMAN else Turn.HUMAN

    @property
    def mark(self) -> Mark:
        return Mark.PLAYER1 if self is Turn.HUMAN else Mark.PLAYER2


class WinLineType(Enum):
    """Types of winning lines on the 3x3 board."""
    ROW = "row"
    COLUMN = "column"
    DIAGONAL = "diagonal"
