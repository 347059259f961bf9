import logging
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from deps.store import get_store
from services import seeds
from services.constants import ROWS
from services.plinko import play_round

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rounds", tags=["rounds"])


class StartIn(BaseModel):
    client_seed: str = Field(min_length=1, max_length=256)
    bet_cents: int = Field(ge=1)
    drop_column: int = Field(ge=0, le=ROWS)


@router.post("/commit")
def commit_round(store=Depends(get_store)):
    server_seed = seeds.generate_server_seed()
    nonce = seeds.generate_nonce()
    commit_hex = seeds.create_commitment(server_seed, nonce)

    record = store.create(server_seed, nonce, commit_hex)
    logger.info("Round %s committed %s", record.round_id, commit_hex)
    return {"round_id": record.round_id, "commit_hex": commit_hex, "nonce": nonce}


@router.post("/{round_id}/start")
def start_round(round_id: int, data: StartIn, store=Depends(get_store)):
    record = store.get(round_id)
    result = play_round(
        record.server_seed, data.client_seed, record.nonce, data.drop_column, data.bet_cents
    )
    record = store.start(round_id, data.client_seed, result)
    logger.info("Round %s started: bin=%s multiplier=%s", round_id, result.bin_index, result.multiplier)

    out = record.public_dict()
    out["win_amount"] = result.payout_cents
    return out


@router.post("/{round_id}/reveal")
def reveal_round(round_id: int, store=Depends(get_store)):
    record = store.reveal(round_id)
    logger.info("Round %s revealed", round_id)
    return {
        "round_id": record.round_id,
        "server_seed": record.server_seed,
        "client_seed": record.client_seed,
        "nonce": record.nonce,
        "commit_hex": record.commit_hex,
        "combined_seed": record.combined_seed,
        "revealed_at": record.revealed_at,
    }


@router.get("/{round_id}")
def get_round(round_id: int, store=Depends(get_store)):
    return store.get(round_id).public_dict()
