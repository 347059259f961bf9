import math
from decimal import Decimal, ROUND_HALF_UP

from services.constants import PAYOUT_TABLE
from services.errors import InvalidParameter

FALLBACK_MULTIPLIER = 1


def get_multiplier(bin_index: int) -> float:
    if 0 <= bin_index < len(PAYOUT_TABLE):
        return PAYOUT_TABLE[bin_index]
    return FALLBACK_MULTIPLIER


def get_payout_table() -> list:
    return list(PAYOUT_TABLE)


def compute_payout(bet_cents: int, multiplier: float) -> int:
    """bet * multiplier in cents, rounded half up."""
    if bet_cents < 0:
        raise InvalidParameter(f"bet_cents must be >= 0, got {bet_cents}")
    amount = Decimal(bet_cents) * Decimal(str(multiplier))
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def theoretical_rtp(table=PAYOUT_TABLE) -> float:
    """Return to player for an unbiased walk (every peg at 0.5)."""
    rows = len(table) - 1
    return sum(math.comb(rows, k) / 2 ** rows * m for k, m in enumerate(table))
