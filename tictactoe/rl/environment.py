"""
Gymnasium environment: an agent plays the human side against OpponentEngine.
"""
import random
from typing import Callable, Dict, Optional

import numpy as np
import gymnasium as gym

from ..models.enums import Location, Mark
from ..game.board import Board
from ..ai.engine import OpponentEngine
from ..ai.evaluation.win_detector import WinDetector


LOCATIONS = tuple(Location)

# Observation values per mark, from the agent's point of view
CELL_VALUES = {Mark.EMPTY: 0, Mark.PLAYER1: 1, Mark.PLAYER2: -1}


class CompassTicTacToeEnv(gym.Env):
    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(self, render_mode: Optional[str] = None):
        super().__init__()
        self.render_mode = render_mode
        self.cells = len(LOCATIONS)

        self.action_space = gym.spaces.Discrete(self.cells)
        self.observation_space = gym.spaces.Box(low=-1, high=1, shape=(self.cells,), dtype=np.int8)
        self.reward_win = 1.0
        self.reward_draw = 0.0
        self.reward_lose = -1.0

        self.board = Board()
        self.engine = OpponentEngine(rng=random.Random(), enable_logging=False)
        self.win_detector = WinDetector()

    def action_mask(self) -> np.ndarray:
        return np.array([self.board.position_at(loc).is_empty() for loc in LOCATIONS], dtype=bool)

    def reset(self, seed=None, options=None):
        super().reset(seed=seed, options=options)
        self.board = Board()
        # A seeded reset also reseeds the opponent so the episode replays exactly
        if seed is not None:
            self.engine.rng = random.Random(seed)
        self.engine.reset_performance_tracking()
        return self._get_obs(), self._get_info()

    def _get_obs(self) -> np.ndarray:
        return np.array([CELL_VALUES[position.mark] for position in self.board.positions], dtype=np.int8)

    def _get_info(self, opponent_move: Optional[Location] = None) -> Dict:
        info = {"action_mask": self.action_mask()}
        if opponent_move is not None:
            info["opponent_move"] = opponent_move.value
        return info

    def _is_valid_action(self, action) -> bool:
        return 0 <= action < self.cells and self.board.position_at(LOCATIONS[action]).is_empty()

    def step(self, action):
        action = int(action)
        if not self._is_valid_action(action):
            raise ValueError(f"Invalid action: {action}")

        self.board.mark_position(LOCATIONS[action], Mark.PLAYER1)
        if self.win_detector.has_win(self.board) is Mark.PLAYER1:
            return self._get_obs(), self.reward_win, True, False, self._get_info()
        if self.board.is_full():
            return self._get_obs(), self.reward_draw, True, False, self._get_info()

        decision = self.engine.react(self.board)
        info = self._get_info(decision.location)
        if self.win_detector.has_win(self.board) is Mark.PLAYER2:
            return self._get_obs(), self.reward_lose, True, False, info
        if self.board.is_full():
            return self._get_obs(), self.reward_draw, True, False, info
        return self._get_obs(), 0.0, False, False, info

    def render(self):
        if self.render_mode == "ansi":
            return str(self.board)
        return None


Policy = Callable[[np.ndarray, np.ndarray], int]


def random_policy(rng: Optional[np.random.Generator] = None) -> Policy:
    """A policy that plays any legal cell uniformly at random."""
    rng = rng if rng is not None else np.random.default_rng()

    def choose(obs: np.ndarray, mask: np.ndarray) -> int:
        return int(rng.choice(np.flatnonzero(mask)))

    return choose


def play_episodes(env: gym.Env, policy: Policy, num_games: int = 100,
                  seed: Optional[int] = None) -> Dict[str, int]:
    """
    Play full games with ``policy`` as the agent.

    Returns:
        Counts of agent wins, losses and draws
    """
    base = env.unwrapped
    results = {"win": 0, "lose": 0, "draw": 0}

    obs, info = env.reset(seed=seed)
    for _ in range(num_games):
        done = False
        reward = 0.0
        while not done:
            action = policy(obs, base.action_mask())
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if reward == base.reward_win:
            results["win"] += 1
        elif reward == base.reward_lose:
            results["lose"] += 1
        else:
            results["draw"] += 1
        obs, info = env.reset()

    return results
