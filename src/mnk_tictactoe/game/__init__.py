"""
Board representation for m,n,k tic-tac-toe.
"""

from mnk_tictactoe.game.board import Board, Cell, Coord, OutOfRangeError, make_board
from mnk_tictactoe.game.zobrist import ZobristHasher, get_zobrist_hasher

__all__ = [
    'Board',
    'Cell',
    'Coord',
    'OutOfRangeError',
    'make_board',
    'ZobristHasher',
    'get_zobrist_hasher',
]
