"""
Configuration for m,n,k tic-tac-toe boards and the minimax engine.
"""

# Board Configuration
BOARD_CONFIG = {
    'size': 3,                          # Side length of the square board
    'win_length': 3,                    # Stones in a row needed to win (1..size)
}

# Engine Configuration
ENGINE_CONFIG = {
    'max_depth': 9,                     # Plies searched from the root (>= 1)
    'use_cache': True,                  # Transposition table on/off
    'use_pruning': True,                # Alpha-beta cutoffs on/off (off = plain minimax)
    'cache_max_entries': 1000000,       # Transposition table cap, oldest entries evicted first
}

# Scoring Configuration
SCORING_CONFIG = {
    'win_score': 1000,                  # Base score of a won position, +/- remaining depth
}

# Zobrist Configuration
ZOBRIST_CONFIG = {
    'seed': 42,                         # Base seed; each board size offsets it by its size
}
