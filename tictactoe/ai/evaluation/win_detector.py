"""
Win detection system for compass tic-tac-toe.
"""
from typing import List, Optional

from ...models.enums import Location, Mark
from ...models.win_pattern import WinLine, WinResult, WIN_LINES
from ...game.board import Board


class WinDetector:
    """
    Detects completed and nearly completed lines.

    Lines are always scanned in catalog order (rows, columns, diagonals), which
    is what decides ties for both win detection and the opponent's choices.
    """

    SIDES = (Mark.PLAYER1, Mark.PLAYER2)

    def __init__(self, lines=WIN_LINES):
        """Initialize the detector with the winning line catalog."""
        self._winning_lines: List[WinLine] = list(lines)

    def check_win(self, board: Board) -> Optional[WinResult]:
        """
        Check if there's a winning line on the board.

        The first monochromatic line in catalog order wins. A single move can
        complete lines for one side only, so two different winners never occur
        in play.

        Returns:
            WinResult if there's a winner, None otherwise
        """
        for line in self._winning_lines:
            for side in self.SIDES:
                if all(board.position_at(loc).is_marked_by(side) for loc in line.locations):
                    return WinResult(winner=side, winning_line=line)
        return None

    def has_win(self, board: Board) -> Optional[Mark]:
        """The winning side's mark, or None."""
        result = self.check_win(board)
        return result.winner if result else None

    def is_draw(self, board: Board) -> bool:
        """A full board with no winning line."""
        return not board.available_positions() and self.check_win(board) is None

    def find_completions(self, board: Board, mark: Mark) -> List[Location]:
        """
        Find locations that would complete a line for ``mark``.

        A line qualifies when ``mark`` holds exactly two of its locations and
        the third is empty.

        Returns:
            Completing locations in catalog order, without duplicates
        """
        held = board.positions_marked(mark)
        completions = []
        for line in self._winning_lines:
            missing = line.missing_from(held)
            if len(missing) == 1 and board.position_at(missing[0]).is_empty():
                if missing[0] not in completions:
                    completions.append(missing[0])
        return completions

