from enum import Enum

# Tablero
ROWS = 12
BINS = ROWS + 1

# leftBias in [0.4, 0.6]
BIAS_MIN = 0.4
BIAS_MAX = 0.6
BIAS_RANGE = 0.2
BIAS_DECIMAL_PLACES = 6

DROP_COLUMN_ADJUSTMENT = 0.01

# Symmetric: edges pay more, center pays least
PAYOUT_TABLE = (16, 9, 2, 1.4, 1.4, 1.2, 1.1, 1.2, 1.4, 1.4, 2, 9, 16)


class RoundStatus(str, Enum):
    CREATED = "CREATED"
    STARTED = "STARTED"
    REVEALED = "REVEALED"
