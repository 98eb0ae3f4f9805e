"""
Static evaluation for positions cut off by depth or a full board.
"""

import numpy as np

from mnk_tictactoe.game.board import Board, Cell


def center_weights(size: int) -> np.ndarray:
    """size - manhattan distance to the centre square, for every cell."""
    center = size // 2
    rows, cols = np.indices((size, size))
    return size - (np.abs(rows - center) + np.abs(cols - center))


def positional_score(board: Board, player: Cell) -> int:
    """
    Centre-control score from player's perspective, ignoring wins.

    Every stone contributes its centre weight, positive for player and
    negative for the opponent, so a stoneless or balanced board scores 0.
    The win length is not used.
    """
    grid = board.to_array()
    weights = center_weights(board.size)
    # Cell values are +1/-1, so grid * player is +1 on own stones and -1 on the opponent's
    return int(np.sum(weights * grid * int(player)))
