"""Round records and their CREATED -> STARTED -> REVEALED lifecycle.

The engine in services/ is pure; this module owns persistence and makes
each transition happen at most once. SqlRoundStore relies on conditional
updates keyed on the current status, MemoryRoundStore on a lock.
"""
import itertools
import json
import logging
import threading
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional

from deps import settings
from deps.db import exec_tsql, fetch_one, get_conn
from services.constants import ROWS, RoundStatus
from services.errors import RoundNotFound, StateViolation
from services.plinko import RoundResult
from services.seeds import ensure_commitment

logger = logging.getLogger(__name__)


@dataclass
class RoundRecord:
    round_id: int
    status: RoundStatus
    nonce: str
    commit_hex: str
    server_seed: str
    client_seed: Optional[str] = None
    combined_seed: Optional[str] = None
    peg_map_hash: Optional[str] = None
    drop_column: Optional[int] = None
    bin_index: Optional[int] = None
    payout_multiplier: Optional[float] = None
    bet_cents: Optional[int] = None
    payout_cents: Optional[int] = None
    peg_map: list = field(default_factory=list)
    path: list = field(default_factory=list)
    rows: int = ROWS
    created_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    revealed_at: Optional[datetime] = None

    def public_dict(self) -> dict:
        """Stored round as shown to players; the server seed stays hidden until reveal."""
        data = asdict(self)
        data["status"] = self.status.value
        if self.status != RoundStatus.REVEALED:
            data["server_seed"] = None
        return data


def _check_startable(record: RoundRecord) -> None:
    if record.status != RoundStatus.CREATED:
        logger.warning("Round %s start refused, status=%s", record.round_id, record.status.value)
        raise StateViolation(f"round {record.round_id} already started")


def _check_revealable(record: RoundRecord) -> None:
    if record.status == RoundStatus.CREATED:
        logger.warning("Round %s reveal refused, not started", record.round_id)
        raise StateViolation(f"round {record.round_id} not started yet")
    ensure_commitment(record.server_seed, record.nonce, record.commit_hex)


def _started(record: RoundRecord, client_seed: str, result: RoundResult, now: datetime) -> RoundRecord:
    return replace(
        record,
        status=RoundStatus.STARTED,
        client_seed=client_seed,
        combined_seed=result.combined_seed,
        peg_map_hash=result.peg_map_hash,
        drop_column=result.drop_column,
        bin_index=result.bin_index,
        payout_multiplier=result.multiplier,
        bet_cents=result.bet_cents,
        payout_cents=result.payout_cents,
        peg_map=[list(row) for row in result.peg_map],
        path=[step.to_dict() for step in result.path],
        started_at=now,
    )


class MemoryRoundStore:
    """Process-local store for development and tests."""

    def __init__(self):
        self._rounds: dict[int, RoundRecord] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _load(self, round_id: int) -> RoundRecord:
        record = self._rounds.get(round_id)
        if record is None:
            raise RoundNotFound(f"round {round_id} not found")
        return record

    def create(self, server_seed: str, nonce: str, commit_hex: str) -> RoundRecord:
        with self._lock:
            record = RoundRecord(
                round_id=next(self._ids),
                status=RoundStatus.CREATED,
                nonce=nonce,
                commit_hex=commit_hex,
                server_seed=server_seed,
                created_at=datetime.now(timezone.utc),
            )
            self._rounds[record.round_id] = record
            return replace(record)

    def get(self, round_id: int) -> RoundRecord:
        with self._lock:
            return replace(self._load(round_id))

    def start(self, round_id: int, client_seed: str, result: RoundResult) -> RoundRecord:
        with self._lock:
            record = self._load(round_id)
            _check_startable(record)
            record = _started(record, client_seed, result, datetime.now(timezone.utc))
            self._rounds[round_id] = record
            return replace(record)

    def reveal(self, round_id: int) -> RoundRecord:
        with self._lock:
            record = self._load(round_id)
            _check_revealable(record)
            if record.status == RoundStatus.STARTED:
                record = replace(record, status=RoundStatus.REVEALED,
                                 revealed_at=datetime.now(timezone.utc))
                self._rounds[round_id] = record
            return replace(record)


_SELECT_ROUND = """
SELECT IdRound, Status, Nonce, CommitHex, ServerSeed, ClientSeed, CombinedSeed,
       PegMapHash, DropColumn, BinIndex, PayoutMultiplier, BetCents, PayoutCents,
       PegMapJson, PathJson, BoardRows, CreatedAt, StartedAt, RevealedAt
  FROM dbo.PlinkoRounds {hint}
 WHERE IdRound = ?;
"""


def _record_from_row(row: dict) -> RoundRecord:
    return RoundRecord(
        round_id=int(row["IdRound"]),
        status=RoundStatus(row["Status"]),
        nonce=row["Nonce"],
        commit_hex=row["CommitHex"],
        server_seed=row["ServerSeed"],
        client_seed=row["ClientSeed"],
        combined_seed=row["CombinedSeed"],
        peg_map_hash=row["PegMapHash"],
        drop_column=row["DropColumn"],
        bin_index=row["BinIndex"],
        payout_multiplier=row["PayoutMultiplier"],
        bet_cents=row["BetCents"],
        payout_cents=row["PayoutCents"],
        peg_map=json.loads(row["PegMapJson"] or "[]"),
        path=json.loads(row["PathJson"] or "[]"),
        rows=row["BoardRows"],
        created_at=row["CreatedAt"],
        started_at=row["StartedAt"],
        revealed_at=row["RevealedAt"],
    )


class SqlRoundStore:
    """dbo.PlinkoRounds on SQL Server (see Backend/DB/plinko_rounds.sql)."""

    def __init__(self, dsn: Optional[str] = None):
        self.dsn = dsn

    def _load(self, conn, round_id: int, lock: bool = False) -> RoundRecord:
        hint = "WITH (UPDLOCK, ROWLOCK)" if lock else ""
        row = fetch_one(conn, _SELECT_ROUND.format(hint=hint), (round_id,))
        if row is None:
            raise RoundNotFound(f"round {round_id} not found")
        return _record_from_row(row)

    def create(self, server_seed: str, nonce: str, commit_hex: str) -> RoundRecord:
        sql = """
INSERT INTO dbo.PlinkoRounds (Status, Nonce, CommitHex, ServerSeed, BoardRows, CreatedAt)
OUTPUT INSERTED.IdRound
VALUES (?, ?, ?, ?, ?, SYSUTCDATETIME());
"""
        with get_conn(self.dsn) as conn:
            rows = exec_tsql(conn, sql, (RoundStatus.CREATED.value, nonce, commit_hex, server_seed, ROWS))
            return self._load(conn, int(rows[0][0]))

    def get(self, round_id: int) -> RoundRecord:
        with get_conn(self.dsn) as conn:
            return self._load(conn, round_id)

    def start(self, round_id: int, client_seed: str, result: RoundResult) -> RoundRecord:
        sql = """
UPDATE dbo.PlinkoRounds
   SET Status = ?, ClientSeed = ?, CombinedSeed = ?, PegMapHash = ?,
       DropColumn = ?, BinIndex = ?, PayoutMultiplier = ?, BetCents = ?,
       PayoutCents = ?, PegMapJson = ?, PathJson = ?, StartedAt = SYSUTCDATETIME()
OUTPUT INSERTED.IdRound
 WHERE IdRound = ? AND Status = ?;
"""
        params = (
            RoundStatus.STARTED.value, client_seed, result.combined_seed, result.peg_map_hash,
            result.drop_column, result.bin_index, result.multiplier, result.bet_cents,
            result.payout_cents,
            json.dumps(result.peg_map, separators=(",", ":")),
            json.dumps([s.to_dict() for s in result.path], separators=(",", ":")),
            round_id, RoundStatus.CREATED.value,
        )
        with get_conn(self.dsn) as conn:
            updated = exec_tsql(conn, sql, params)
            record = self._load(conn, round_id)
        if not updated:
            # lost the race or never was CREATED
            _check_startable(record)
        return record

    def reveal(self, round_id: int) -> RoundRecord:
        sql = """
UPDATE dbo.PlinkoRounds
   SET Status = ?, RevealedAt = SYSUTCDATETIME()
 WHERE IdRound = ? AND Status = ?;
"""
        with get_conn(self.dsn) as conn:
            record = self._load(conn, round_id, lock=True)
            _check_revealable(record)
            if record.status == RoundStatus.STARTED:
                exec_tsql(conn, sql, (RoundStatus.REVEALED.value, round_id, RoundStatus.STARTED.value))
                record = self._load(conn, round_id)
        return record


@lru_cache(maxsize=1)
def get_store():
    """FastAPI dependency: the configured round store, one per process."""
    if settings.ROUND_STORE == "memory":
        logger.info("Using in-memory round store")
        return MemoryRoundStore()
    if settings.ROUND_STORE == "sql":
        return SqlRoundStore()
    raise RuntimeError(f"Unknown ROUND_STORE {settings.ROUND_STORE!r}")
