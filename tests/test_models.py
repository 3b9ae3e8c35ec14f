import pytest

from tictactoe.models.enums import CORNERS, EDGES, Location, Mark, Turn, WinLineType
from tictactoe.models.errors import InvalidLocation
from tictactoe.models.move import Move
from tictactoe.models.position import Position
from tictactoe.models.win_pattern import WIN_LINES, WinLine, WinResult


def test_locations_are_in_reading_order():
    assert [loc.value for loc in Location] == ['nw', 'n', 'ne', 'w', 'c', 'e', 'sw', 's', 'se']


def test_location_parse_ignores_case_and_whitespace():
    assert Location.parse(' NW ') is Location.NW
    assert Location.parse(Location.C) is Location.C


@pytest.mark.parametrize("text", ["", "x", "north", "5", None])
def test_location_parse_rejects_unknown_identifiers(text):
    with pytest.raises(InvalidLocation):
        Location.parse(text)


def test_location_classification():
    assert all(loc.is_corner() for loc in CORNERS)
    assert all(loc.is_edge() for loc in EDGES)
    assert Location.C.is_center()
    assert not Location.C.is_corner() and not Location.C.is_edge()
    assert set(CORNERS) | set(EDGES) | {Location.C} == set(Location)


def test_mark_opponent():
    assert Mark.PLAYER1.opponent() is Mark.PLAYER2
    assert Mark.PLAYER2.opponent() is Mark.PLAYER1
    with pytest.raises(ValueError):
        Mark.EMPTY.opponent()


def test_turn_alternates():
    assert Turn.HUMAN.next() is Turn.OPPONENT
    assert Turn.OPPONENT.next() is Turn.HUMAN
    assert Turn.HUMAN.mark is Mark.PLAYER1


def test_position_starts_empty():
    position = Position(location=Location.E)
    assert position.is_empty()
    assert not position.is_marked_by(Mark.PLAYER1)


def test_position_rejects_strings():
    with pytest.raises(ValueError):
        Position(location='e')


def test_move_cannot_place_empty():
    with pytest.raises(ValueError):
        Move(location=Location.C, mark=Mark.EMPTY)
    assert str(Move(location=Location.C, mark=Mark.PLAYER2)) == "o -> c"


def test_catalog_has_eight_lines_in_fixed_order():
    assert len(WIN_LINES) == 8
    assert [line.type for line in WIN_LINES] == [WinLineType.ROW] * 3 + [WinLineType.COLUMN] * 3 + [WinLineType.DIAGONAL] * 2
    assert WIN_LINES[5].locations == (Location.N, Location.C, Location.S)
    assert WIN_LINES[7].locations == (Location.SW, Location.C, Location.NE)


def test_win_line_validation():
    with pytest.raises(ValueError):
        WinLine(type=WinLineType.ROW, locations=(Location.NW, Location.NW, Location.N))


def test_win_line_missing_from():
    top = WIN_LINES[0]
    assert top.missing_from([Location.NW, Location.C]) == [Location.N, Location.NE]


def test_win_result_rejects_empty_winner():
    with pytest.raises(ValueError):
        WinResult(winner=Mark.EMPTY, winning_line=WIN_LINES[0])
