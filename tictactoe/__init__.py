"""Compass tic-tac-toe: a human plays the program on a 3x3 board."""

__version__ = "0.1.0"
