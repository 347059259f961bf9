from fastapi import APIRouter

from services.constants import BIAS_MAX, BIAS_MIN, BINS, ROWS
from services.payout import get_payout_table, theoretical_rtp

router = APIRouter(prefix="/plinko", tags=["plinko"])


@router.get("/config")
def board_config():
    return {
        "rows": ROWS,
        "bins": BINS,
        "bias_range": [BIAS_MIN, BIAS_MAX],
        "payout_table": get_payout_table(),
        "theoretical_rtp": round(theoretical_rtp(), 6),
    }
