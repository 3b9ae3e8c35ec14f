"""
Train and evaluate a masked PPO agent against the program player.

Requires the ``rl`` extra (stable-baselines3 and sb3-contrib).

Usage:
    tictactoe-train train --timesteps 200000 --save-every 50000 --model-dir models
    tictactoe-train evaluate models/ppo_compass_tictactoe_200000 --games 100
"""
import argparse
import os
import sys
from typing import Dict, List, Optional

import numpy as np
from sb3_contrib import MaskablePPO
from sb3_contrib.common.wrappers import ActionMasker

from .environment import CompassTicTacToeEnv, play_episodes


MODEL_PREFIX = "ppo_compass_tictactoe"


def masking(env) -> np.ndarray:
    return env.unwrapped.action_mask()


def make_masked_env() -> ActionMasker:
    return ActionMasker(CompassTicTacToeEnv(), masking)


def train(total_timesteps: int,
          save_every: Optional[int] = None,
          model_dir: Optional[str] = None,
          learning_rate: float = 0.001,
          seed: Optional[int] = None,
          verbose: int = 0,
          **ppo_kwargs) -> MaskablePPO:
    """
    Train a MaskablePPO agent, saving a checkpoint every ``save_every`` steps.

    Stops early on KeyboardInterrupt and returns the model trained so far.
    """
    model = MaskablePPO("MlpPolicy", make_masked_env(), verbose=verbose,
                        learning_rate=learning_rate, seed=seed, **ppo_kwargs)

    step = save_every or total_timesteps
    done = 0
    while done < total_timesteps:
        chunk = min(step, total_timesteps - done)
        try:
            model.learn(total_timesteps=chunk, reset_num_timesteps=False)
        except KeyboardInterrupt:
            break
        done += chunk
        if model_dir:
            model.save(os.path.join(model_dir, f"{MODEL_PREFIX}_{done}"))

    return model


def load(path: str) -> MaskablePPO:
    return MaskablePPO.load(path, env=make_masked_env())


def evaluate(model: MaskablePPO, num_games: int = 100, seed: Optional[int] = None) -> Dict[str, int]:
    """Play ``num_games`` with the trained model as the agent."""
    def policy(obs, mask):
        action, _ = model.predict(obs, action_masks=mask, deterministic=True)
        return int(action)

    return play_episodes(make_masked_env(), policy, num_games=num_games, seed=seed)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='tictactoe-train',
        description="Train or evaluate a masked PPO agent against the program player"
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    train_parser = subparsers.add_parser('train', help='Train a new agent')
    train_parser.add_argument('--timesteps', type=int, default=200000)
    train_parser.add_argument('--save-every', type=int, default=50000)
    train_parser.add_argument('--model-dir', default='models')
    train_parser.add_argument('--learning-rate', type=float, default=0.001)
    train_parser.add_argument('--seed', type=int, default=None)

    eval_parser = subparsers.add_parser('evaluate', help='Evaluate a saved agent')
    eval_parser.add_argument('model_path')
    eval_parser.add_argument('--games', type=int, default=100)
    eval_parser.add_argument('--seed', type=int, default=None)

    args = parser.parse_args(argv)

    if args.command == 'train':
        os.makedirs(args.model_dir, exist_ok=True)
        train(args.timesteps, save_every=args.save_every, model_dir=args.model_dir,
              learning_rate=args.learning_rate, seed=args.seed, verbose=1)
        return 0

    results = evaluate(load(args.model_path), num_games=args.games, seed=args.seed)
    print("win:", results["win"])
    print("lose:", results["lose"])
    print("draw:", results["draw"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
