"""
Game state machine for compass tic-tac-toe.

A round is a sequence of transitions over ``(Board, GameState)``. The
transition functions here are the whole of the rules; ``GameLoop`` only wires
them to a collaborator that does the talking to the player.
"""
import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Protocol, Sequence, Tuple

from ..models.enums import GameStatus, Location, Mark, Turn
from ..models.errors import InvalidLocation, IllegalMove
from .board import Board, LocationLike
from ..ai.evaluation.win_detector import WinDetector


@dataclass(frozen=True)
class GameState:
    """
    Status of one round.

    Attributes:
        status: IN_PROGRESS until a win or draw, then ENDED for good
        winner: Winning mark, None while in progress or on a draw
        turn: Side to move next
    """
    status: GameStatus = GameStatus.IN_PROGRESS
    winner: Optional[Mark] = None
    turn: Turn = Turn.HUMAN

    @property
    def is_over(self) -> bool:
        return self.status is GameStatus.ENDED

    @property
    def is_draw(self) -> bool:
        return self.is_over and self.winner is None


_win_detector = WinDetector()


def new_game() -> Tuple[Board, GameState]:
    """A blank board and a fresh state with the human to move."""
    return Board(), GameState()


def is_valid_human_move(available: Sequence[Location], location: LocationLike) -> bool:
    """True when ``location`` names one of the free cells in ``available``."""
    try:
        return Location.parse(location) in available
    except InvalidLocation:
        return False


def evaluate_end(board: Board, state: GameState) -> GameState:
    """
    Check for a win, then for a draw.

    An ended state is returned unchanged.
    """
    if state.is_over:
        return state

    winner = _win_detector.has_win(board)
    if winner is not None:
        return replace(state, status=GameStatus.ENDED, winner=winner)
    if not board.available_positions():
        return replace(state, status=GameStatus.ENDED, winner=None)
    return state


def _check_turn(state: GameState, expected: Turn, location=None):
    if state.is_over:
        raise IllegalMove("Game is already over", location)
    if state.turn is not expected:
        raise IllegalMove(f"It's the {state.turn.value}'s turn, not the {expected.value}'s", location)


def apply_human_move(board: Board, state: GameState, location: LocationLike) -> GameState:
    """
    Place the human's mark and advance the round.

    Raises:
        IllegalMove: If it is not the human's turn, the game is over, or the cell is taken
        InvalidLocation: If the location is unknown
    """
    _check_turn(state, Turn.HUMAN, location)
    board.mark_position(location, Turn.HUMAN.mark)
    return _advance(board, state)


def apply_opponent_move(board: Board, state: GameState, engine) -> GameState:
    """
    Let the opponent engine place its mark and advance the round.

    Raises:
        IllegalMove: If it is not the opponent's turn or the game is over
    """
    _check_turn(state, Turn.OPPONENT)
    engine.react(board)
    return _advance(board, state)


def _advance(board: Board, state: GameState) -> GameState:
    state = evaluate_end(board, state)
    if state.is_over:
        return state
    return replace(state, turn=state.turn.next())


class Collaborator(Protocol):
    """The outside world as seen by the game loop."""

    def request_human_move(self, available: List[Location]) -> Location:
        """Block until the player picks one of ``available``."""

    def render_board(self, rows: List[List[str]]) -> None:
        """Show the board."""

    def request_replay_decision(self) -> bool:
        """Block until the player answers yes or no."""

    def announce_outcome(self, winner: Optional[Mark]) -> None:
        """Report the winner, or a draw when ``winner`` is None."""


class GameLoop:
    """
    Plays rounds between a human collaborator and the opponent engine.

    Each step draws the board, checks whether the round has ended and, if
    not, lets the side to move play. Once the round ends the outcome is
    announced and the collaborator is asked about a replay.
    """

    def __init__(self, collaborator: Collaborator, engine, enable_logging: bool = True):
        self.collaborator = collaborator
        self.engine = engine
        self.enable_logging = enable_logging

        if self.enable_logging:
            self._setup_logging()

    def _setup_logging(self):
        """Set up logging for round progress."""
        self.logger = logging.getLogger('tictactoe_game')
        self.logger.setLevel(logging.INFO)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def _log(self, message: str):
        if self.enable_logging:
            self.logger.info(message)

    def play_round(self) -> GameState:
        """Play one round to completion and return its final state."""
        board, state = new_game()
        self._log("New round")

        while True:
            self.collaborator.render_board(board.render())
            state = evaluate_end(board, state)
            if state.is_over:
                break
            state = self._take_turn(board, state)

        self._log(f"Round over, winner: {state.winner.value if state.winner else 'none (draw)'}")
        self.collaborator.announce_outcome(state.winner)
        return state

    def _take_turn(self, board: Board, state: GameState) -> GameState:
        if state.turn is Turn.HUMAN:
            location = self.collaborator.request_human_move(board.available_positions())
            self._log(f"Human plays {Location.parse(location).value}")
            return apply_human_move(board, state, location)

        state = apply_opponent_move(board, state, self.engine)
        self._log(f"Opponent plays {board.move_history[-1].location.value}")
        return state

    def run(self) -> List[GameState]:
        """
        Play rounds until the collaborator declines a replay.

        Returns:
            Final state of every round played
        """
        results = []
        while True:
            results.append(self.play_round())
            if not self.collaborator.request_replay_decision():
                break
        return results
