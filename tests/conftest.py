from typing import List, Optional

import pytest

from tictactoe.models.enums import Location, Mark
from tictactoe.ai.engine import OpponentEngine


class FirstChoice:
    """Stand-in for random.Random that always picks the first option."""

    def choice(self, seq):
        return seq[0]


class ScriptedCollaborator:
    """Plays scripted human moves and replay answers, recording what it is shown."""

    def __init__(self, moves, replays=()):
        self.moves = list(moves)
        self.replays = list(replays)
        self.rendered: List[List[List[str]]] = []
        self.outcomes: List[Optional[Mark]] = []
        self.offered: List[List[Location]] = []

    def request_human_move(self, available):
        self.offered.append(list(available))
        return Location.parse(self.moves.pop(0))

    def render_board(self, rows):
        self.rendered.append(rows)

    def request_replay_decision(self):
        return self.replays.pop(0) if self.replays else False

    def announce_outcome(self, winner):
        self.outcomes.append(winner)


@pytest.fixture
def first_choice():
    return FirstChoice()


@pytest.fixture
def engine(first_choice):
    return OpponentEngine(rng=first_choice, enable_logging=False)
