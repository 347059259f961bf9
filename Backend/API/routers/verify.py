from typing import Optional
from fastapi import APIRouter, Query

from services.constants import ROWS
from services.plinko import verify_round

router = APIRouter(prefix="/verify", tags=["verify"])


@router.get("")
def verify(
    server_seed: str = Query(min_length=1),
    client_seed: str = Query(min_length=1),
    nonce: str = Query(min_length=1),
    drop_column: int = Query(ge=0, le=ROWS),
    commitment: Optional[str] = None,
):
    """Recompute a round from its revealed inputs. Reads no stored state."""
    return verify_round(server_seed, client_seed, nonce, drop_column, commitment)
