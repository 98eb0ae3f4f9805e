"""
mnk_tictactoe: generalized m,n,k tic-tac-toe with a minimax engine.

Usage:
    from mnk_tictactoe import Board, Cell, MinimaxEngine

    board = Board(size=3, win_length=3)
    engine = MinimaxEngine(Cell.X, max_depth=9)
    result = engine.find_best_move(board)
    if result.has_move:
        board.set(result.move, Cell.X)
"""

from mnk_tictactoe.game import Board, Cell, Coord, OutOfRangeError, make_board
from mnk_tictactoe.engine import (
    MinimaxEngine,
    MoveEvaluation,
    NO_MOVE,
    SearchStatistics,
    make_engine,
)

__all__ = [
    'Board',
    'Cell',
    'Coord',
    'OutOfRangeError',
    'make_board',
    'MinimaxEngine',
    'MoveEvaluation',
    'NO_MOVE',
    'SearchStatistics',
    'make_engine',
]
