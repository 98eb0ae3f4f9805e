import numpy as np
from enum import IntEnum
from typing import NamedTuple, Optional, Sequence

from mnk_tictactoe.config import BOARD_CONFIG
from mnk_tictactoe.game.zobrist import get_zobrist_hasher


class OutOfRangeError(IndexError):
    """Raised when a coordinate lies outside the board."""


class Cell(IntEnum):
    """
    Contents of a single board square.

    Values follow the {-1, 0, 1} encoding of the numpy grid.
    """
    EMPTY = 0
    X = 1
    O = -1

    @property
    def opponent(self) -> "Cell":
        if self is Cell.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return Cell(-self.value)

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {Cell.EMPTY: '.', Cell.X: 'X', Cell.O: 'O'}
_FROM_SYMBOL = {symbol: cell for cell, symbol in _SYMBOLS.items()}


class Coord(NamedTuple):
    row: int
    col: int


class Board:
    """
    Square m,n,k board: size x size cells, win_length in a row wins.

    The grid is an int8 numpy array holding Cell values. The Zobrist hash is
    kept up to date on every set(), so reading it is O(1).
    """

    # Directions: horizontal, vertical, diagonal (down-right), anti-diagonal (down-left)
    DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))

    def __init__(self, size: int = 3, win_length: int = 3):
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        if not 1 <= win_length <= size:
            raise ValueError(
                f"Win length must be in [1, {size}], got {win_length}"
            )
        self._size = size
        self._win_length = win_length
        self._grid = np.zeros((size, size), dtype=np.int8)
        self._zobrist = get_zobrist_hasher(size)
        self._hash = 0

    def __repr__(self):
        return f"Board({self._size}x{self._size}, win={self._win_length})"

    def __str__(self):
        return '\n'.join(
            ''.join(Cell(int(v)).symbol for v in row) for row in self._grid
        )

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self._size == other._size and np.array_equal(self._grid, other._grid)

    __hash__ = None  # mutable; use zobrist_hash() for memoization keys

    @property
    def size(self) -> int:
        return self._size

    @property
    def win_length(self) -> int:
        return self._win_length

    @property
    def move_count(self) -> int:
        return int(np.count_nonzero(self._grid))

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_array(cls, grid, win_length: Optional[int] = None) -> "Board":
        """
        Build a board from a square array of {-1, 0, 1} values.

        Args:
            grid: Square array-like of cell values
            win_length: Run length needed to win (defaults to the board size)
        """
        grid = np.asarray(grid)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise ValueError(f"Grid must be square, got shape {grid.shape}")
        size = grid.shape[0]
        board = cls(size, size if win_length is None else win_length)
        for row, col in zip(*np.nonzero(grid)):
            board.set(int(row), int(col), Cell(int(grid[row, col])))
        return board

    @classmethod
    def from_rows(cls, rows: Sequence[str], win_length: Optional[int] = None) -> "Board":
        """Build a board from strings such as ``["XO.", ".X.", "..O"]``."""
        try:
            grid = [[_FROM_SYMBOL[ch].value for ch in row] for row in rows]
        except KeyError as exc:
            raise ValueError(f"Unknown cell symbol {exc.args[0]!r}") from None
        return cls.from_array(grid, win_length)

    def copy(self) -> "Board":
        clone = Board(self._size, self._win_length)
        clone._grid = self._grid.copy()
        clone._hash = self._hash
        return clone

    def to_array(self) -> np.ndarray:
        return self._grid.copy()

    # -- cell access ----------------------------------------------------------

    def _check_bounds(self, row: int, col: int):
        if not (0 <= row < self._size and 0 <= col < self._size):
            raise OutOfRangeError(
                f"Invalid coordinates ({row}, {col}) for board of size {self._size}"
            )

    def get(self, row, col: Optional[int] = None) -> Cell:
        """Return the cell at (row, col); also accepts a single Coord."""
        if col is None:
            row, col = row
        self._check_bounds(row, col)
        return Cell(int(self._grid[row, col]))

    def set(self, row, col, cell: Optional[Cell] = None):
        """
        Overwrite the cell at (row, col); also accepts set(coord, cell).

        No occupancy check is made: the search places and clears marks freely.
        """
        if cell is None:
            cell = col
            row, col = row
        self._check_bounds(row, col)
        previous = int(self._grid[row, col])
        if previous:
            self._hash = self._zobrist.toggle(self._hash, row, col, previous)
        if cell:
            self._hash = self._zobrist.toggle(self._hash, row, col, int(cell))
        self._grid[row, col] = cell

    def is_empty(self, row, col: Optional[int] = None) -> bool:
        return self.get(row, col) == Cell.EMPTY

    def is_full(self) -> bool:
        return not (self._grid == Cell.EMPTY).any()

    def empty_cells(self) -> list:
        """All empty cells in row-major order."""
        return [Coord(int(r), int(c)) for r, c in np.argwhere(self._grid == Cell.EMPTY)]

    # -- rules ----------------------------------------------------------------

    def check_win(self, player: Cell) -> bool:
        """
        True if player owns win_length consecutive cells in any orientation.

        For each direction the owned-cell mask is AND-ed with itself shifted
        by 1..k-1 steps; any surviving True marks the start of a winning run.
        """
        if player == Cell.EMPTY:
            return False

        mask = self._grid == player
        n, k = self._size, self._win_length
        span = n - k + 1

        for dr, dc in self.DIRECTIONS:
            row_span = span if dr else n
            col_start = k - 1 if dc < 0 else 0
            col_span = span if dc else n

            run = mask[0:row_span, col_start:col_start + col_span].copy()
            for i in range(1, k):
                r0, c0 = dr * i, col_start + dc * i
                run &= mask[r0:r0 + row_span, c0:c0 + col_span]
                if not run.any():
                    break
            if run.any():
                return True

        return False

    def zobrist_hash(self) -> int:
        """Deterministic structural hash of the cell contents."""
        return self._hash


def make_board(**overrides) -> Board:
    """Create an empty board from BOARD_CONFIG, with optional overrides."""
    unknown = set(overrides) - set(BOARD_CONFIG)
    if unknown:
        raise KeyError(f"Unknown board options: {sorted(unknown)}")
    config = {**BOARD_CONFIG, **overrides}
    return Board(config['size'], config['win_length'])
