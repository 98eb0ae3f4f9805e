"""
Transposition table for caching minimax search results.

Positions reached through different move orders share one entry, keyed by
the board's Zobrist hash. Scores are stored from the owning engine's
perspective, so a table must never be shared between engines playing
different sides.

Key concepts:
- Bound types: EXACT (searched with the window open), LOWER (cutoff on a
  maximizing step, true value >= stored), UPPER (cutoff on a minimizing step
  or all children failed low, true value <= stored)
- Depth match: won/lost scores include the remaining depth, so an entry is
  only reused at the same remaining depth it was computed at
- Rule match: the hash covers cells only, so entries also record the win
  length they were scored under
- Size cap: once max_entries is reached the oldest entry is evicted
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from mnk_tictactoe.config import ENGINE_CONFIG


class BoundType(Enum):
    """Type of bound stored in transposition table entry."""
    EXACT = 0   # Exact value, window never closed
    LOWER = 1   # Lower bound (beta cutoff, actual value >= stored value)
    UPPER = 2   # Upper bound (alpha cutoff, actual value <= stored value)


@dataclass
class TTEntry:
    """
    Transposition table entry storing a cached search result.

    Attributes:
        zobrist_hash: Position hash the entry was stored under
        win_length: Win length of the board the position was scored on
        depth: Remaining search depth when the entry was stored
        maximizing: Whether the node was a maximizing step (side to move)
        score: Minimax score (or bound) from the engine's perspective
        bound: Type of bound (EXACT/LOWER/UPPER)
    """
    zobrist_hash: int
    win_length: int
    depth: int
    maximizing: bool
    score: int
    bound: BoundType

    def is_usable(
        self,
        win_length: int,
        depth: int,
        maximizing: bool,
        alpha: float,
        beta: float
    ) -> bool:
        """True if the stored score answers a query under these rules, depth and window."""
        if (self.win_length != win_length or self.depth != depth
                or self.maximizing != maximizing):
            return False
        if self.bound is BoundType.EXACT:
            return True
        if self.bound is BoundType.LOWER:
            return self.score >= beta
        return self.score <= alpha


class TranspositionTable:
    """
    Size-capped hash -> TTEntry mapping owned by a single engine.

    One entry per position: a store for a position already present replaces
    it, since the newer result is at least as informative for the depth it
    was searched at. A store of a new position into a full table evicts the
    oldest entry first.
    """

    def __init__(self, max_entries: int = ENGINE_CONFIG['cache_max_entries']):
        """
        Args:
            max_entries: Maximum number of stored positions (at least 1)
        """
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.max_entries = max_entries
        self.table: Dict[int, TTEntry] = {}
        self.evictions = 0

    def __len__(self):
        return len(self.table)

    def __contains__(self, zobrist_hash: int) -> bool:
        return zobrist_hash in self.table

    def lookup(
        self,
        zobrist_hash: int,
        win_length: int,
        depth: int,
        maximizing: bool,
        alpha: float,
        beta: float
    ) -> Optional[int]:
        """
        Look up a cached score.

        Returns the cached score if:
        1. An entry exists for the hash
        2. It was scored under the same win length
        3. It was stored at the same remaining depth and side to move
        4. Its bound type allows a cutoff for the current alpha-beta window

        Args:
            zobrist_hash: Position hash
            win_length: Win length of the board being searched
            depth: Remaining search depth
            maximizing: Whether the querying node is a maximizing step
            alpha: Current alpha bound
            beta: Current beta bound

        Returns:
            Cached score, or None if no usable entry exists
        """
        entry = self.table.get(zobrist_hash)
        if entry is None or not entry.is_usable(win_length, depth, maximizing, alpha, beta):
            return None
        return entry.score

    def store(
        self,
        zobrist_hash: int,
        win_length: int,
        depth: int,
        maximizing: bool,
        score: int,
        alpha: float,
        beta: float
    ):
        """
        Store a search result, classifying it against the window it was searched with.

        Args:
            zobrist_hash: Position hash
            win_length: Win length of the board being searched
            depth: Remaining search depth
            maximizing: Whether the node was a maximizing step
            score: Best score found at the node
            alpha: Alpha bound on entry to the node
            beta: Beta bound on entry to the node
        """
        if score <= alpha:
            bound = BoundType.UPPER
        elif score >= beta:
            bound = BoundType.LOWER
        else:
            bound = BoundType.EXACT

        if zobrist_hash not in self.table and len(self.table) >= self.max_entries:
            # Dicts keep insertion order, so the first key is the oldest
            del self.table[next(iter(self.table))]
            self.evictions += 1

        self.table[zobrist_hash] = TTEntry(
            zobrist_hash=zobrist_hash,
            win_length=win_length,
            depth=depth,
            maximizing=maximizing,
            score=score,
            bound=bound,
        )

    def get(self, zobrist_hash: int) -> Optional[TTEntry]:
        return self.table.get(zobrist_hash)

    def clear(self):
        """Clear all entries (use between games or on reconfiguration)."""
        self.table.clear()
        self.evictions = 0
