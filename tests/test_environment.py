import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from tictactoe.rl.environment import CompassTicTacToeEnv, play_episodes, random_policy

from .conftest import FirstChoice


@pytest.fixture
def env():
    return CompassTicTacToeEnv()


def test_passes_gymnasium_checks(env):
    check_env(env, skip_render_check=True)


def test_reset_gives_empty_board(env):
    obs, info = env.reset(seed=0)
    assert obs.dtype == np.int8
    assert obs.tolist() == [0] * 9
    assert info["action_mask"].all()


def test_opponent_replies_to_each_move(env):
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(0)

    assert obs[0] == 1 and obs[4] == -1
    assert reward == 0.0
    assert not terminated and not truncated
    assert info["opponent_move"] == 'c'
    assert not info["action_mask"][0] and not info["action_mask"][4]


def test_occupied_cell_is_rejected(env):
    env.reset(seed=0)
    env.step(0)
    with pytest.raises(ValueError):
        env.step(4)


def test_agent_loses_when_it_ignores_a_threat(env):
    env.reset(seed=0)
    env.step(0)   # nw, opponent c
    env.step(2)   # ne, opponent blocks n
    obs, reward, terminated, _, _ = env.step(6)   # sw, opponent completes n c s
    assert terminated
    assert reward == -1.0
    assert obs[7] == -1


def test_agent_wins_with_a_fork(env):
    env.reset(seed=0)
    env.engine.rng = FirstChoice()
    env.step(4)   # c, opponent nw
    env.step(8)   # se, opponent n
    env.step(2)   # ne threatens e and sw, opponent blocks e
    obs, reward, terminated, _, _ = env.step(6)
    assert terminated
    assert reward == 1.0


def test_seeded_episodes_repeat(env):
    env.reset(seed=11)
    first = env.step(4)[4]["opponent_move"]
    env.reset(seed=11)
    assert env.step(4)[4]["opponent_move"] == first


def test_unseeded_resets_replay_after_a_seeded_reset():
    def opponent_replies(env):
        env.reset(seed=3)
        replies = []
        for _ in range(3):
            env.reset()
            replies.append(env.step(4)[4]["opponent_move"])
        return replies

    assert opponent_replies(CompassTicTacToeEnv()) == opponent_replies(CompassTicTacToeEnv())


def test_play_episodes_counts_every_game(env):
    results = play_episodes(env, random_policy(np.random.default_rng(0)), num_games=5, seed=1)
    assert sum(results.values()) == 5


def test_ansi_render():
    env = CompassTicTacToeEnv(render_mode="ansi")
    env.reset(seed=0)
    env.step(0)
    assert env.render() == "|x| | |\n| |o| |\n| | | |"
