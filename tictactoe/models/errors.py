"""
Exceptions raised when the board contract is violated.
"""


class InvalidLocation(ValueError):
    """Raised for a location that is not one of the nine board identifiers."""

    def __init__(self, location):
        super().__init__(f"Invalid location: {location!r}")
        self.location = location


class IllegalMove(Exception):
    """Raised when a move breaks the rules of play (occupied cell, wrong turn, game over)."""

    def __init__(self, message: str, location=None):
        super().__init__(message)
        self.location = location
