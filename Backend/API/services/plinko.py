"""Provably fair plinko round.

play_round is a pure function of (server_seed, client_seed, nonce,
drop_column, bet_cents): the same inputs always give the same peg map,
path, bin and payout, so anyone holding the revealed server seed can
recompute a round.
"""
from dataclasses import dataclass

from services import board, drop, payout, seeds
from services.constants import ROWS
from services.drop import PathStep
from services.errors import InvalidParameter
from services.rng import RoundRNG


@dataclass(frozen=True)
class RoundResult:
    combined_seed: str
    peg_map: list
    peg_map_hash: str
    path: list
    bin_index: int
    multiplier: float
    bet_cents: int
    payout_cents: int
    drop_column: int
    rows: int = ROWS

    def to_dict(self) -> dict:
        return {
            "combined_seed": self.combined_seed,
            "peg_map": [list(row) for row in self.peg_map],
            "peg_map_hash": self.peg_map_hash,
            "path": [step.to_dict() for step in self.path],
            "bin_index": self.bin_index,
            "multiplier": self.multiplier,
            "bet_cents": self.bet_cents,
            "payout_cents": self.payout_cents,
            "drop_column": self.drop_column,
            "rows": self.rows,
        }


def validate_inputs(drop_column: int, bet_cents: int) -> None:
    # bool is an int subclass; reject it explicitly
    if isinstance(drop_column, bool) or not isinstance(drop_column, int):
        raise InvalidParameter(f"drop_column must be an integer, got {drop_column!r}")
    if not 0 <= drop_column <= ROWS:
        raise InvalidParameter(f"drop_column must be between 0 and {ROWS}, got {drop_column}")
    if isinstance(bet_cents, bool) or not isinstance(bet_cents, int):
        raise InvalidParameter(f"bet_cents must be an integer, got {bet_cents!r}")
    if bet_cents < 0:
        raise InvalidParameter(f"bet_cents must be >= 0, got {bet_cents}")


def play_round(server_seed: str, client_seed: str, nonce: str,
               drop_column: int, bet_cents: int) -> RoundResult:
    validate_inputs(drop_column, bet_cents)

    combined_seed = seeds.generate_combined_seed(server_seed, client_seed, nonce)
    rng = RoundRNG(combined_seed)

    # peg map consumes the first draws, the path continues the same sequence
    peg_map = board.generate_peg_map(rng, ROWS)
    peg_map_hash = board.hash_peg_map(peg_map)
    path: list[PathStep] = drop.simulate_drop(rng, peg_map, drop_column)

    bin_index = path[-1].column
    multiplier = payout.get_multiplier(bin_index)

    return RoundResult(
        combined_seed=combined_seed,
        peg_map=peg_map,
        peg_map_hash=peg_map_hash,
        path=path,
        bin_index=bin_index,
        multiplier=multiplier,
        bet_cents=bet_cents,
        payout_cents=payout.compute_payout(bet_cents, multiplier),
        drop_column=drop_column,
    )


def verify_round(server_seed: str, client_seed: str, nonce: str,
                 drop_column: int, commitment: str | None = None) -> dict:
    """Replay a revealed round for an auditor. The bet does not affect the outcome."""
    result = play_round(server_seed, client_seed, nonce, drop_column, 0)
    commit_hex = seeds.create_commitment(server_seed, nonce)

    report = {
        "server_seed": server_seed,
        "client_seed": client_seed,
        "nonce": nonce,
        "drop_column": drop_column,
        "commit_hex": commit_hex,
        "combined_seed": result.combined_seed,
        "peg_map_hash": result.peg_map_hash,
        "bin_index": result.bin_index,
        "payout_multiplier": result.multiplier,
        "peg_map": result.to_dict()["peg_map"],
        "path": [step.to_dict() for step in result.path],
        "rows": result.rows,
        "verified": True,
    }
    if commitment is not None:
        report["commitment_valid"] = seeds.verify_commitment(server_seed, nonce, commitment)
        report["verified"] = report["commitment_valid"]
    return report
