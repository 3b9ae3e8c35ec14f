import pytest

from tictactoe.ai.evaluation.win_detector import WinDetector
from tictactoe.game.board import Board
from tictactoe.models.enums import Location, Mark
from tictactoe.models.win_pattern import WIN_LINES


@pytest.fixture
def detector():
    return WinDetector()


def test_empty_board_has_no_winner(detector):
    board = Board()
    assert detector.has_win(board) is None
    assert not detector.is_draw(board)


@pytest.mark.parametrize("line", WIN_LINES, ids=lambda line: ' '.join(l.value for l in line.locations))
@pytest.mark.parametrize("mark", [Mark.PLAYER1, Mark.PLAYER2])
def test_every_line_wins(detector, line, mark):
    board = Board()
    for location in line.locations:
        board.mark_position(location, mark)

    result = detector.check_win(board)
    assert result.winner is mark
    assert result.winning_line == line


def test_two_of_three_is_not_a_win(detector):
    board = Board.from_marks(player1=['nw', 'n'], player2=['ne'])
    assert detector.has_win(board) is None


def test_full_board_without_line_is_a_draw(detector):
    board = Board.from_marks(player1=['nw', 'ne', 'w', 's', 'se'], player2=['n', 'c', 'e', 'sw'])
    assert board.is_full()
    assert detector.has_win(board) is None
    assert detector.is_draw(board)


def test_full_board_with_line_is_a_win_not_a_draw(detector):
    board = Board.from_marks(player1=['nw', 'n', 'ne', 'e', 'sw'], player2=['w', 'c', 's', 'se'])
    assert board.is_full()
    assert detector.has_win(board) is Mark.PLAYER1
    assert not detector.is_draw(board)


def test_find_completions_in_catalog_order(detector):
    # top row needs n, left column needs w
    board = Board.from_marks(player1=['nw', 'ne', 'sw'], player2=['c', 'se'])
    assert detector.find_completions(board, Mark.PLAYER1) == [Location.N, Location.W]


def test_find_completions_skips_blocked_lines(detector):
    board = Board.from_marks(player1=['nw', 'se'], player2=['c'])
    assert detector.find_completions(board, Mark.PLAYER1) == []


def test_find_completions_has_no_duplicates(detector):
    # c completes both the middle row and the middle column
    board = Board.from_marks(player2=['w', 'e', 'n', 's'])
    assert detector.find_completions(board, Mark.PLAYER2) == [Location.C]

