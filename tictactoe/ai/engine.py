"""
Opponent engine for compass tic-tac-toe.

The opponent does not search. It reacts to the human's opening move, then
takes a win when one is on the board, blocks the human's win when it must,
and otherwise plays a random free cell.
"""
import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..models.enums import CENTER, CORNERS, Location, Mark
from ..game.board import Board
from .evaluation.win_detector import WinDetector


class NoAvailableMoves(Exception):
    """Raised when the opponent is asked to move on a full board."""

    def __init__(self, message: str, board: Board):
        super().__init__(message)
        self.board = board


class Strategy(Enum):
    """Which rule of the policy produced a move."""
    OPENING = "opening"
    WIN = "win"
    BLOCK = "block"
    RANDOM = "random"


@dataclass
class OpponentDecision:
    """
    A move chosen by the opponent.

    Attributes:
        location: Where the opponent plays
        strategy: Policy branch that picked the location
        reasoning: Human-readable explanation of the decision
    """
    location: Location
    strategy: Strategy
    reasoning: str


class OpponentEngine:
    """
    Picks the program player's move with a fixed priority policy:

    1. React to the human's opening move (centre, or a random corner if the
       human took the centre)
    2. Complete a line of its own
    3. Block a line the human is about to complete
    4. Play a random free cell
    """

    # Pause choices used by the terminal game so the opponent seems to think
    HUMANIZE_DELAYS = (0.2, 0.3, 0.4, 0.5, 0.6)

    def __init__(self, mark: Mark = Mark.PLAYER2,
                 rng: Optional[Any] = None,
                 seed: Optional[int] = None,
                 think_delays: Sequence[float] = (),
                 sleep: Callable[[float], None] = time.sleep,
                 enable_logging: bool = True):
        """
        Initialize the opponent.

        Args:
            mark: Mark the opponent plays with
            rng: Object with a ``choice(seq)`` method used for every random pick
            seed: Seed for a private random.Random when no rng is given
            think_delays: Pause lengths to pick from before each reaction
            sleep: Callable used to pause
            enable_logging: Whether to log each decision
        """
        if mark is Mark.EMPTY:
            raise ValueError("Opponent mark cannot be EMPTY")

        self.mark = mark
        self.human_mark = mark.opponent()
        self.rng = rng if rng is not None else random.Random(seed)
        self.think_delays = tuple(think_delays)
        self._delay_rng = random.Random()
        self.sleep = sleep
        self.enable_logging = enable_logging
        self.win_detector = WinDetector()

        # Performance tracking
        self.decision_history: List[OpponentDecision] = []

        if self.enable_logging:
            self._setup_logging()

    def _setup_logging(self):
        """Set up logging for opponent decisions."""
        self.logger = logging.getLogger('tictactoe_ai')
        self.logger.setLevel(logging.INFO)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def react(self, board: Board) -> OpponentDecision:
        """
        Choose a move and place the opponent's mark on the board.

        Raises:
            NoAvailableMoves: If the board is full
        """
        self._humanize()
        decision = self.select_move(board)
        board.mark_position(decision.location, self.mark)
        return decision

    def select_move(self, board: Board) -> OpponentDecision:
        """
        Choose a move without changing the board.

        Raises:
            NoAvailableMoves: If the board is full
        """
        own_marks = board.positions_marked(self.mark)
        human_marks = board.positions_marked(self.human_mark)

        if not own_marks and len(human_marks) <= 1:
            decision = self._react_to_opening_move(human_marks)
        else:
            decision = self._take_win(board) or self._prevent_win(board) or self._play_random(board)

        self.decision_history.append(decision)
        self._log_decision(decision, board)
        return decision

    def _react_to_opening_move(self, human_marks: List[Location]) -> OpponentDecision:
        if not human_marks:
            return OpponentDecision(CENTER, Strategy.OPENING, "Opening with the centre")

        opening = human_marks[0]
        if opening.is_corner():
            return OpponentDecision(CENTER, Strategy.OPENING, f"Centre against corner opening {opening.value}")
        if opening.is_center():
            corner = self.rng.choice(CORNERS)
            return OpponentDecision(corner, Strategy.OPENING, f"Corner {corner.value} against centre opening")
        return OpponentDecision(CENTER, Strategy.OPENING, f"Centre against edge opening {opening.value}")

    def _take_win(self, board: Board) -> Optional[OpponentDecision]:
        completions = self.win_detector.find_completions(board, self.mark)
        if completions:
            return OpponentDecision(completions[0], Strategy.WIN, "Winning move")
        return None

    def _prevent_win(self, board: Board) -> Optional[OpponentDecision]:
        completions = self.win_detector.find_completions(board, self.human_mark)
        if completions:
            return OpponentDecision(completions[0], Strategy.BLOCK, "Blocking opponent's winning move")
        return None

    def _play_random(self, board: Board) -> OpponentDecision:
        available = board.available_positions()
        if not available:
            raise NoAvailableMoves("No legal moves available", board)
        location = self.rng.choice(available)
        return OpponentDecision(location, Strategy.RANDOM, "Random position selected")

    def _humanize(self):
        if self.think_delays:
            self.sleep(self._delay_rng.choice(self.think_delays))

    def _log_decision(self, decision: OpponentDecision, board: Board):
        """Log an opponent decision."""
        if not self.enable_logging:
            return

        self.logger.info(
            f"{decision.strategy.value.upper()} - Move: {decision.location.value}, "
            f"Board: {board.to_string()}, Reason: {decision.reasoning}"
        )

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of decisions made so far.

        Returns:
            Dictionary with the decision count and a count per strategy
        """
        by_strategy = {strategy.value: 0 for strategy in Strategy}
        for decision in self.decision_history:
            by_strategy[decision.strategy.value] += 1

        return {
            'total_decisions': len(self.decision_history),
            'by_strategy': by_strategy,
        }

    def reset_performance_tracking(self):
        """Reset all performance tracking data."""
        self.decision_history.clear()
