"""
Minimax search engine with alpha-beta pruning for m,n,k tic-tac-toe.

The engine searches on behalf of one fixed player ("self"). Scores are always
from that player's perspective: self's turns are maximizing steps, the
opponent's turns are minimizing steps.

Key features:
- Alpha-beta pruning (cut branches that can't affect the final result)
- In-place board mutation: each placement is undone before returning, even
  on cutoffs and exceptions
- Transposition table keyed by the board's Zobrist hash
- Faster wins and slower losses preferred via the remaining-depth bonus
- Centre opening without search on an empty board


Algorithm overview:

    def minimax(board, depth, alpha, beta, to_move, maximizing):
        if self wins:      return WIN + depth
        if opponent wins:  return -WIN - depth
        if full or depth == 0:
            return positional_score(board)

        if tt_score := tt.lookup(board, depth, alpha, beta):
            return tt_score

        best = -inf if maximizing else +inf
        for move in empty_cells:
            place(move); score = minimax(board, depth-1, alpha, beta, other, not maximizing); undo(move)
            if maximizing: best = max(best, score); alpha = max(alpha, best)
            else:          best = min(best, score); beta = min(beta, best)
            if beta <= alpha:
                break

        tt.store(board, depth, best, bound_type)
        return best
"""

import logging
import time
from dataclasses import asdict, dataclass, replace
from typing import Optional

from mnk_tictactoe.config import ENGINE_CONFIG, SCORING_CONFIG
from mnk_tictactoe.engine.heuristic import positional_score
from mnk_tictactoe.engine.transposition_table import TranspositionTable
from mnk_tictactoe.game.board import Board, Cell, Coord

logger = logging.getLogger(__name__)


# Window limits, well outside any reachable score
SCORE_INF = 1000000


@dataclass(frozen=True)
class MoveEvaluation:
    """Chosen move and its score. move is None when the board had no empty cell."""
    move: Optional[Coord]
    score: int

    @property
    def has_move(self) -> bool:
        return self.move is not None


NO_MOVE = MoveEvaluation(move=None, score=0)


@dataclass
class SearchStatistics:
    """Counters for the last top-level search."""
    nodes_visited: int = 0
    nodes_generated: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    time_ms: int = 0

    def reset(self):
        self.nodes_visited = 0
        self.nodes_generated = 0
        self.cache_hits = 0
        self.cache_misses = 0
        self.time_ms = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.cache_hits + self.cache_misses
        return self.cache_hits / lookups if lookups > 0 else 0.0

    def as_dict(self) -> dict:
        """Plain numeric columns, e.g. for a CSV row."""
        return asdict(self)

    def summary(self) -> str:
        return (
            f"visited={self.nodes_visited} generated={self.nodes_generated} "
            f"cache_hits={self.cache_hits} cache_misses={self.cache_misses} "
            f"hit_rate={self.hit_rate:.1%} time={self.time_ms}ms"
        )


class MinimaxEngine:
    """
    Depth-limited minimax with alpha-beta pruning and a transposition table.

    One engine plays one side. Its transposition table holds scores from that
    side's perspective and is never shared with another engine.
    """

    def __init__(
        self,
        player: Cell,
        max_depth: int = ENGINE_CONFIG['max_depth'],
        use_cache: bool = ENGINE_CONFIG['use_cache'],
        use_pruning: bool = ENGINE_CONFIG['use_pruning'],
        cache_max_entries: int = ENGINE_CONFIG['cache_max_entries']
    ):
        """
        Initialize minimax engine.

        Args:
            player: Side to search for (Cell.X or Cell.O)
            max_depth: Plies searched from the root, at least 1
            use_cache: Enable the transposition table
            use_pruning: Enable alpha-beta cutoffs (disable to get plain minimax)
            cache_max_entries: Transposition table size cap
        """
        if player not in (Cell.X, Cell.O):
            raise ValueError(f"Engine player must be X or O, got {player!r}")
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")

        self.player = Cell(player)
        self.opponent = self.player.opponent
        self.max_depth = max_depth
        self.use_cache = use_cache
        self.use_pruning = use_pruning
        self.win_score = SCORING_CONFIG['win_score']

        self.tt = TranspositionTable(max_entries=cache_max_entries)
        self._stats = SearchStatistics()

    def __repr__(self):
        return (
            f"MinimaxEngine(player={self.player.name}, max_depth={self.max_depth}, "
            f"use_cache={self.use_cache}, use_pruning={self.use_pruning})"
        )

    @property
    def statistics(self) -> SearchStatistics:
        """Snapshot of the last search's counters; later searches do not change it."""
        return replace(self._stats)

    @property
    def cache_size(self) -> int:
        return len(self.tt)

    def find_best_move(self, board: Board) -> MoveEvaluation:
        """
        Pick the best move for self on board.

        The board is mutated during the search and restored before returning.

        Args:
            board: Position to search, with self to move

        Returns:
            MoveEvaluation; NO_MOVE if the board has no empty cell
        """
        self._stats.reset()
        start_time = time.time() * 1000

        moves = board.empty_cells()
        if not moves:
            return NO_MOVE

        # Opening on an empty board: take the centre without searching
        if len(moves) == board.size * board.size:
            center = board.size // 2
            return MoveEvaluation(Coord(center, center), 0)

        best_move = moves[0]
        best_score = -SCORE_INF
        alpha = -SCORE_INF
        beta = SCORE_INF

        for move in moves:
            board.set(move, self.player)
            try:
                score = self._minimax(board, self.max_depth - 1, alpha, beta,
                                      self.opponent, False)
            finally:
                board.set(move, Cell.EMPTY)

            if score > best_score:
                best_score = score
                best_move = move

            if self.use_pruning:
                alpha = max(alpha, score)

        self._stats.time_ms = int(time.time() * 1000 - start_time)

        logger.debug("%s chose %s score=%d (%s)", self.player.name, tuple(best_move),
                     best_score, self._stats.summary())

        return MoveEvaluation(best_move, best_score)

    def _minimax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        to_move: Cell,
        maximizing: bool
    ) -> int:
        """
        Minimax with alpha-beta pruning.

        Args:
            board: Board (mutated and restored)
            depth: Remaining depth
            alpha: Alpha bound
            beta: Beta bound
            to_move: Side placing the next stone
            maximizing: True if to_move is self

        Returns:
            Score from self's perspective
        """
        self._stats.nodes_visited += 1

        # Terminal check or depth limit
        if board.check_win(self.player):
            return self.win_score + depth  # prefer faster wins
        if board.check_win(self.opponent):
            return -self.win_score - depth  # prefer slower losses
        if depth <= 0 or board.is_full():
            return positional_score(board, self.player)

        # Look up transposition table
        if self.use_cache:
            cached = self.tt.lookup(board.zobrist_hash(), board.win_length, depth,
                                    maximizing, alpha, beta)
            if cached is not None:
                self._stats.cache_hits += 1
                return cached
            self._stats.cache_misses += 1

        moves = board.empty_cells()
        self._stats.nodes_generated += len(moves)

        original_alpha, original_beta = alpha, beta
        next_to_move = to_move.opponent
        best_score = -SCORE_INF if maximizing else SCORE_INF

        for move in moves:
            board.set(move, to_move)
            try:
                score = self._minimax(board, depth - 1, alpha, beta,
                                      next_to_move, not maximizing)
            finally:
                board.set(move, Cell.EMPTY)

            if maximizing:
                best_score = max(best_score, score)
            else:
                best_score = min(best_score, score)

            if not self.use_pruning:
                continue

            if maximizing:
                alpha = max(alpha, best_score)
            else:
                beta = min(beta, best_score)

            if beta <= alpha:
                break  # alpha-beta cutoff

        # Store in TT
        if self.use_cache:
            self.tt.store(board.zobrist_hash(), board.win_length, depth, maximizing, best_score,
                          original_alpha, original_beta)

        return best_score

    def clear_cache(self):
        """Clear transposition table. Statistics are kept."""
        logger.info("%s: clearing transposition table (%d entries)",
                    self.player.name, len(self.tt))
        self.tt.clear()

    def set_use_cache(self, use_cache: bool):
        """Toggle memoization; stored scores are dropped either way."""
        self.use_cache = use_cache
        self.clear_cache()


def make_engine(player: Cell, **overrides) -> MinimaxEngine:
    """Create an engine from ENGINE_CONFIG, with optional overrides."""
    unknown = set(overrides) - set(ENGINE_CONFIG)
    if unknown:
        raise KeyError(f"Unknown engine options: {sorted(unknown)}")
    config = {**ENGINE_CONFIG, **overrides}
    return MinimaxEngine(
        player,
        max_depth=config['max_depth'],
        use_cache=config['use_cache'],
        use_pruning=config['use_pruning'],
        cache_max_entries=config['cache_max_entries'],
    )
