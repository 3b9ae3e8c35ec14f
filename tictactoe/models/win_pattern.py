"""
Winning line models for compass tic-tac-toe.
"""
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .enums import Location, Mark, WinLineType


@dataclass(frozen=True)
class WinLine:
    """
    A set of three locations that wins the game when held by one side.

    Attributes:
        type: Row, column or diagonal
        locations: The three locations on the line
        description: Human-readable description of the line
    """
    type: WinLineType
    locations: Tuple[Location, Location, Location]
    description: str = ""

    def __post_init__(self):
        """Validate line parameters."""
        if len(self.locations) != 3:
            raise ValueError(f"Win line must have exactly 3 locations, got {len(self.locations)}")
        if len(set(self.locations)) != 3:
            raise ValueError(f"Win line locations must be distinct, got {self.locations}")

    def missing_from(self, held: Iterable[Location]) -> List[Location]:
        """Locations on this line that are not in ``held``."""
        held = set(held)
        return [loc for loc in self.locations if loc not in held]

    def __str__(self) -> str:
        return f"{self.description}: {' '.join(loc.value for loc in self.locations)}"


def _line(line_type: WinLineType, names: str, description: str) -> WinLine:
    return WinLine(
        type=line_type,
        locations=tuple(Location(name) for name in names.split()),
        description=description,
    )


# Catalog order decides tie-breaks for both win detection and the opponent
WIN_LINES: Tuple[WinLine, ...] = (
    _line(WinLineType.ROW, "nw n ne", "top row"),
    _line(WinLineType.ROW, "w c e", "middle row"),
    _line(WinLineType.ROW, "sw s se", "bottom row"),
    _line(WinLineType.COLUMN, "nw w sw", "left column"),
    _line(WinLineType.COLUMN, "ne e se", "right column"),
    _line(WinLineType.COLUMN, "n c s", "middle column"),
    _line(WinLineType.DIAGONAL, "nw c se", "diagonal"),
    _line(WinLineType.DIAGONAL, "sw c ne", "diagonal"),
)


@dataclass
class WinResult:
    """
    Represents the result of a winning condition check.

    Attributes:
        winner: Mark of the side that won
        winning_line: The line that created the win
    """
    winner: Mark
    winning_line: WinLine

    def __post_init__(self):
        if self.winner is Mark.EMPTY:
            raise ValueError("Winner cannot be EMPTY")

    def __str__(self) -> str:
        return f"{self.winner.value} wins with {self.winning_line}"

