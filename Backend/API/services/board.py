import hashlib, math

from services.constants import BIAS_DECIMAL_PLACES, BIAS_RANGE, ROWS
from services.rng import RoundRNG

_SCALE = 10 ** BIAS_DECIMAL_PLACES


def round_bias(value: float) -> float:
    # round-half-up to 6 places
    return math.floor(value * _SCALE + 0.5) / _SCALE


def generate_peg_map(rng: RoundRNG, rows: int = ROWS) -> list[list[float]]:
    """Row r has r+1 left-move biases in [0.4, 0.6].

    One draw per peg, row-major then left to right. These are the first
    rows*(rows+1)/2 draws of the round.
    """
    peg_map = []
    for row in range(rows):
        peg_row = []
        for _ in range(row + 1):
            left_bias = 0.5 + (rng.next() - 0.5) * BIAS_RANGE
            peg_row.append(round_bias(left_bias))
        peg_map.append(peg_row)
    return peg_map


def format_bias(value: float) -> str:
    return f"{value:.{BIAS_DECIMAL_PLACES}f}".rstrip("0").rstrip(".")


def serialize_peg_map(peg_map: list[list[float]]) -> str:
    """Canonical text hashed into the peg map commitment.

    ``[[0.422123],[0.552503,0.408786],...]``: no whitespace, at most six
    decimals, trailing zeros stripped.
    """
    rows = ("[" + ",".join(format_bias(v) for v in row) + "]" for row in peg_map)
    return "[" + ",".join(rows) + "]"


def hash_peg_map(peg_map: list[list[float]]) -> str:
    return hashlib.sha256(serialize_peg_map(peg_map).encode("utf-8")).hexdigest()
