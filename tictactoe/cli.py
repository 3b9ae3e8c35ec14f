#!/usr/bin/env python3
"""
Command line entry point for compass tic-tac-toe.

Usage:
    tictactoe play [--seed N] [--no-delay] [--no-clear] [--verbose]
    tictactoe suggest <board_string> [--format human|json|simple]

Board String Format:
    9-character string for the cells nw n ne w c e sw s se, where:
    - 'x' = the human (player 1) holds this cell
    - 'o' = the program (player 2) holds this cell
    - '_' = Empty cell

Example:
    tictactoe suggest "x________"
    tictactoe suggest "xx__o____" --format json
"""

import sys
import argparse
import json
from typing import Callable, List, Optional, TextIO

from .models.enums import Location, Mark
from .game.board import Board
from .game.game_loop import GameLoop, is_valid_human_move
from .ai.engine import OpponentEngine, OpponentDecision
from .ai.evaluation.win_detector import WinDetector


class TerminalShell:
    """
    Talks to the player through a text terminal.

    Implements the collaborator protocol used by GameLoop.
    """

    CLEAR_SCREEN = "\033[2J\033[H"

    def __init__(self, input_func: Optional[Callable[[str], str]] = None,
                 output: Optional[TextIO] = None,
                 clear_screen: bool = True):
        self.input_func = input_func or input
        self.output = output if output is not None else sys.stdout
        self.clear_screen = clear_screen
        self._last_rows: List[List[str]] = []

    def _print(self, text: str = ""):
        print(text, file=self.output)

    def _clear(self):
        if self.clear_screen:
            self.output.write(self.CLEAR_SCREEN)

    def _draw(self, rows: List[List[str]]):
        for row in rows:
            self._print('|' + '|'.join(row) + '|')

    def render_board(self, rows: List[List[str]]) -> None:
        self._last_rows = rows
        self._clear()
        self._draw(rows)

    def request_human_move(self, available: List[Location]) -> Location:
        self._print("Make your move")
        while True:
            answer = self.input_func("").strip()
            if is_valid_human_move(available, answer):
                return Location.parse(answer)
            self._clear()
            self._draw(self._last_rows)
            self._print(f"Try one of these: {', '.join(loc.value for loc in available)}")

    def request_replay_decision(self) -> bool:
        self._print("Play again? (y/n)")
        answer = None
        while answer not in ('y', 'n'):
            answer = self.input_func("").strip().lower()
        return answer == 'y'

    def announce_outcome(self, winner: Optional[Mark]) -> None:
        if winner:
            self._print(f"{winner.value} wins!")
        else:
            self._print("draw!")


def format_output(decision: OpponentDecision, format_type: str = 'human') -> str:
    """
    Format the opponent decision output.

    Args:
        decision: OpponentDecision object
        format_type: Output format ('human', 'json', 'simple')

    Returns:
        Formatted output string
    """
    if format_type == 'json':
        output = {
            'suggested_move': decision.location.value,
            'strategy': decision.strategy.value,
            'reasoning': decision.reasoning,
        }
        return json.dumps(output, indent=2)

    elif format_type == 'simple':
        return decision.location.value

    else:  # human format
        output = []
        output.append(f"Suggested Move: {decision.location.value}")
        output.append(f"Strategy: {decision.strategy.value}")
        output.append(f"Reasoning: {decision.reasoning}")
        return "\n".join(output)


def run_play(args) -> int:
    engine = OpponentEngine(
        seed=args.seed,
        think_delays=() if args.no_delay else OpponentEngine.HUMANIZE_DELAYS,
        enable_logging=args.verbose,
    )
    shell = TerminalShell(clear_screen=not args.no_clear)
    loop = GameLoop(shell, engine, enable_logging=args.verbose)

    try:
        loop.run()
    except (KeyboardInterrupt, EOFError):
        print()
    print("Goodbye!")
    return 0


def run_suggest(args) -> int:
    try:
        board = Board.from_string(args.board_string)

        report = board.detect_corruption()
        if report.is_corrupted:
            raise ValueError("; ".join(report.issues))

        win_result = WinDetector().check_win(board)
        if win_result:
            raise ValueError(f"Game is already over: {win_result}")

        engine = OpponentEngine(seed=args.seed, enable_logging=args.verbose)
        decision = engine.select_move(board)
        print(format_output(decision, args.format))

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='tictactoe',
        description="Play compass tic-tac-toe against the program, or ask for its move",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play a game in the terminal
  tictactoe play

  # Ask for the program's reply after the human opened in a corner
  tictactoe suggest "x________"

  # JSON output
  tictactoe suggest "xx__o____" --format json
        """
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    play = subparsers.add_parser('play', help='Play a game in the terminal')
    play.add_argument('--seed', type=int, default=None, help='Seed for the program player')
    play.add_argument('--no-delay', action='store_true', help='Do not pause before the program moves')
    play.add_argument('--no-clear', action='store_true', help='Do not clear the screen between turns')
    play.add_argument('--verbose', action='store_true', help='Enable verbose logging')
    play.set_defaults(handler=run_play)

    suggest = subparsers.add_parser('suggest', help="Print the program's move for a board")
    suggest.add_argument(
        'board_string',
        help='9-character board representation (x/o/_ for nw n ne w c e sw s se)'
    )
    suggest.add_argument('--seed', type=int, default=None, help='Seed for random choices')
    suggest.add_argument(
        '--format',
        choices=['human', 'json', 'simple'],
        default='human',
        help='Output format (default: human)'
    )
    suggest.add_argument('--verbose', action='store_true', help='Enable verbose logging')
    suggest.set_defaults(handler=run_suggest)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and dispatch to the chosen command."""
    args = build_parser().parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
