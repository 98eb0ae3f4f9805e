"""
Zobrist hashing for m,n,k board positions.

Zobrist hashing gives O(1) position keys for the transposition table. Every
(row, col, player) combination gets a fixed pseudo-random 64-bit key, and a
position's hash is the XOR of the keys of its occupied squares.

Implementation:
- Keys are drawn from a seeded numpy RNG, one table per board size, so the
  same contents always hash the same way across boards and processes
- Hash = XOR of all keys corresponding to occupied squares (empty board = 0)
- Incremental update: hash ^= key[row][col][player] on place and on remove
- No side-to-move key: the engine's perspective is fixed per instance and
  the side to move follows from the stone counts
"""

import numpy as np
from typing import Dict

from mnk_tictactoe.config import ZOBRIST_CONFIG


class ZobristHasher:
    """
    Zobrist key table for a size x size board.

    size x size x 2 keys: index 0 for player -1 (O), index 1 for player 1 (X).
    """

    def __init__(self, size: int, seed: int = ZOBRIST_CONFIG['seed']):
        """
        Args:
            size: Board side length
            seed: Random seed for reproducibility
        """
        self.size = size

        rng = np.random.RandomState(seed + size)
        table = rng.randint(
            1, 2**63 - 1,
            size=(size, size, 2),
            dtype=np.uint64
        )
        # Plain ints: XOR on Python ints is far cheaper than on numpy scalars
        self.zobrist_table = table.tolist()

    def key(self, row: int, col: int, player: int) -> int:
        return self.zobrist_table[row][col][0 if player == -1 else 1]

    def toggle(self, current_hash: int, row: int, col: int, player: int) -> int:
        """
        XOR one stone in or out of a hash.

        Placing and removing are the same operation due to XOR properties.
        """
        return current_hash ^ self.key(row, col, player)

    def hash_position(self, state: np.ndarray) -> int:
        """
        Compute the hash of a grid from scratch.

        Args:
            state: Grid (size, size) with values in {-1, 0, 1}

        Returns:
            64-bit hash value (int)
        """
        hash_value = 0
        for row, col in zip(*np.nonzero(state)):
            hash_value ^= self.key(int(row), int(col), int(state[row, col]))
        return hash_value


_hashers: Dict[int, ZobristHasher] = {}


def get_zobrist_hasher(size: int) -> ZobristHasher:
    """
    Get or create the shared hasher for a board size.

    All boards of one size must share a key table, otherwise equal contents
    would not hash equally.
    """
    hasher = _hashers.get(size)
    if hasher is None:
        hasher = ZobristHasher(size)
        _hashers[size] = hasher
    return hasher
