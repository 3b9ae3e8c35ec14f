# Data models and enums
from .enums import Mark, Location, GameStatus, Turn, WinLineType, CORNERS, EDGES, CENTER
from .errors import InvalidLocation, IllegalMove
from .position import Position
from .move import Move
from .win_pattern import WinLine, WinResult, WIN_LINES

__all__ = ['Mark', 'Location', 'GameStatus', 'Turn', 'WinLineType', 'CORNERS', 'EDGES', 'CENTER',
           'InvalidLocation', 'IllegalMove', 'Position', 'Move', 'WinLine', 'WinResult', 'WIN_LINES']
