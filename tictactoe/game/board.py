"""
Board representation for compass tic-tac-toe.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from ..models.enums import Location, Mark
from ..models.errors import InvalidLocation, IllegalMove
from ..models.move import Move
from ..models.position import Position


LocationLike = Union[Location, str]


@dataclass
class CorruptionReport:
    """Report of board corruption issues."""
    is_corrupted: bool
    issues: List[str]


class Board:
    """
    The 3x3 board: nine positions named by compass direction.

    Layout:
        nw | n | ne
        w  | c | e
        sw | s | se
    """

    TOTAL_POSITIONS = 9
    ROW_LOCATIONS = (
        (Location.NW, Location.N, Location.NE),
        (Location.W, Location.C, Location.E),
        (Location.SW, Location.S, Location.SE),
    )

    # Characters used by to_string/from_string
    EMPTY_CHAR = '_'

    def __init__(self, positions: Optional[List[Position]] = None):
        """
        Initialize the board.

        Args:
            positions: Existing positions to adopt; a blank board when omitted
        """
        self.positions: List[Position] = positions if positions is not None else self._blank_positions()
        self.move_history: List[Move] = []
        self._by_location = {position.location: position for position in self.positions}

    @staticmethod
    def _blank_positions() -> List[Position]:
        return [Position(location=location) for location in Location]

    @classmethod
    def from_marks(cls, player1: Iterable[LocationLike] = (),
                   player2: Iterable[LocationLike] = ()) -> 'Board':
        """
        Build a board with the given locations already marked.

        The marks are placed directly, with no turn-order check, so that
        arbitrary positions can be set up for analysis.
        """
        board = cls()
        for location in player1:
            board.mark_position(location, Mark.PLAYER1)
        for location in player2:
            board.mark_position(location, Mark.PLAYER2)
        return board

    @classmethod
    def from_string(cls, board_string: str) -> 'Board':
        """
        Parse a 9-character board string in location order (nw n ne w c e sw s se).

        Characters: 'x' for player1, 'o' for player2, '_' for empty.

        Raises:
            ValueError: If the string has the wrong length or characters
        """
        if len(board_string) != cls.TOTAL_POSITIONS:
            raise ValueError(
                f"Board string must be exactly {cls.TOTAL_POSITIONS} characters, got {len(board_string)}"
            )

        player1, player2 = [], []
        for location, char in zip(Location, board_string.lower()):
            if char == Mark.PLAYER1.value:
                player1.append(location)
            elif char == Mark.PLAYER2.value:
                player2.append(location)
            elif char != cls.EMPTY_CHAR:
                raise ValueError(
                    f"Invalid character '{char}' at {location.value}. Use 'x', 'o', or '{cls.EMPTY_CHAR}'"
                )
        return cls.from_marks(player1=player1, player2=player2)

    def to_string(self) -> str:
        """Inverse of from_string."""
        return ''.join(
            self.EMPTY_CHAR if position.is_empty() else position.mark.value
            for position in self.positions
        )

    def position_at(self, location: LocationLike) -> Position:
        """
        Get the position for a location.

        Raises:
            InvalidLocation: If the location is not one of the nine identifiers
        """
        location = Location.parse(location)
        position = self._by_location.get(location)
        if position is None:
            raise InvalidLocation(location)
        return position

    def mark_position(self, location: LocationLike, mark: Mark) -> Move:
        """
        Claim an empty position for one side.

        Returns:
            The recorded Move

        Raises:
            InvalidLocation: If the location is unknown
            IllegalMove: If the position is already occupied or mark is EMPTY
        """
        position = self.position_at(location)
        if mark is Mark.EMPTY:
            raise IllegalMove(f"Cannot place an empty mark at {position.location.value}", position.location)
        if not position.is_empty():
            raise IllegalMove(
                f"Position {position.location.value} is already occupied by {position.mark.value}",
                position.location,
            )

        position.mark = mark
        move = Move(location=position.location, mark=mark)
        self.move_history.append(move)
        return move

    def positions_marked(self, mark: Mark) -> List[Location]:
        """All locations holding the given mark, in board order."""
        return [position.location for position in self.positions if position.is_marked_by(mark)]

    def available_positions(self) -> List[Location]:
        """All empty locations, in board order."""
        return self.positions_marked(Mark.EMPTY)

    def is_full(self) -> bool:
        """Check if the board is full."""
        return not self.available_positions()

    def rows(self) -> List[List[Position]]:
        """Top, middle and bottom rows of positions."""
        return [[self._by_location[location] for location in row] for row in self.ROW_LOCATIONS]

    def render(self) -> List[List[str]]:
        """Glyphs for each row, a space for empty cells."""
        return [[position.mark.glyph for position in row] for row in self.rows()]

    def reset(self):
        """Reset the board to initial state."""
        for position in self.positions:
            position.mark = Mark.EMPTY
        self.move_history.clear()

    def copy(self) -> 'Board':
        """Create an independent copy with the same marks and history."""
        new_board = Board([Position(location=p.location, mark=p.mark) for p in self.positions])
        new_board.move_history = list(self.move_history)
        return new_board

    def detect_corruption(self) -> CorruptionReport:
        """
        Detect and report any inconsistency in the board state.

        Returns:
            CorruptionReport with details of any issues found
        """
        issues = []

        if len(self.positions) != self.TOTAL_POSITIONS:
            issues.append(f"Expected {self.TOTAL_POSITIONS} positions, found {len(self.positions)}")

        locations = [position.location for position in self.positions]
        if len(set(locations)) != len(locations):
            issues.append("Duplicate locations found")

        missing = [location.value for location in Location if location not in locations]
        if missing:
            issues.append(f"Missing locations: {', '.join(missing)}")

        player1_count = len(self.positions_marked(Mark.PLAYER1))
        player2_count = len(self.positions_marked(Mark.PLAYER2))
        if player1_count - player2_count not in (0, 1):
            issues.append(
                f"Invalid move count: {Mark.PLAYER1.value} has {player1_count} marks, "
                f"{Mark.PLAYER2.value} has {player2_count}"
            )

        return CorruptionReport(is_corrupted=len(issues) > 0, issues=issues)

    def __str__(self) -> str:
        """Rows drawn as |x|o| |."""
        return "\n".join('|' + '|'.join(row) + '|' for row in self.render())
