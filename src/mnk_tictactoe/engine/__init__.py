"""
Minimax search engine for m,n,k tic-tac-toe.

This module contains the search components:
- Transposition table for caching search results
- Static centre-control evaluation for cut-off positions
- Minimax with alpha-beta pruning over an in-place mutated board
"""

from mnk_tictactoe.engine.transposition_table import TranspositionTable, BoundType, TTEntry
from mnk_tictactoe.engine.heuristic import positional_score
from mnk_tictactoe.engine.minimax import (
    MinimaxEngine,
    MoveEvaluation,
    NO_MOVE,
    SearchStatistics,
    make_engine,
)

__all__ = [
    'TranspositionTable',
    'BoundType',
    'TTEntry',
    'positional_score',
    'MinimaxEngine',
    'MoveEvaluation',
    'NO_MOVE',
    'SearchStatistics',
    'make_engine',
]
