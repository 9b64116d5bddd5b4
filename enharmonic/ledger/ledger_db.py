"""SQLite-backed ledger hosting puzzle state and token balances.

The ledger is the hosting environment for the program: it provides
create-if-absent records, exclusive read-modify-write transactions and
per-database writer serialization. Program code never locks on its own; it
runs its whole sequence inside ``LedgerDB.transaction()``.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator

from ..core.errors import AlreadyExists
from ..core.models import Pathway, PuzzleState

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value
STORAGE_INT_MAX = 2**63 - 1

_PATHWAY_COLUMNS = {
    Pathway.A: "pathway_a_count",
    Pathway.B: "pathway_b_count",
    Pathway.C: "pathway_c_count",
}


def _now_iso() -> str:
    return datetime.now().isoformat()


class LedgerDB:
    """SQLite ledger with exclusive, reentrant transactions."""

    def __init__(self, path: Path | str):
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        # Autocommit mode: transactions are opened explicitly with BEGIN IMMEDIATE
        self.conn = sqlite3.connect(
            self.path, check_same_thread=False, isolation_level=None
        )
        self.conn.row_factory = sqlite3.Row
        self._lock = threading.RLock()
        self._set_pragmas()
        self.init_schema()

    def _set_pragmas(self) -> None:
        cursor = self.conn.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.execute("PRAGMA journal_mode = WAL")
        cursor.execute("PRAGMA synchronous = NORMAL")

    def init_schema(self) -> None:
        """Create ledger schema and indexes."""
        with self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS puzzle_states (
                    seed_id TEXT PRIMARY KEY,
                    address TEXT NOT NULL UNIQUE,
                    difficulty INTEGER NOT NULL,
                    total_bridges INTEGER NOT NULL DEFAULT 0,
                    pathway_a_count INTEGER NOT NULL DEFAULT 0,
                    pathway_b_count INTEGER NOT NULL DEFAULT 0,
                    pathway_c_count INTEGER NOT NULL DEFAULT 0,
                    is_active INTEGER NOT NULL DEFAULT 1,
                    fragment_data TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    CHECK (
                        total_bridges
                        = pathway_a_count + pathway_b_count + pathway_c_count
                    )
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS mints (
                    address TEXT PRIMARY KEY,
                    authority TEXT NOT NULL,
                    decimals INTEGER NOT NULL,
                    supply INTEGER NOT NULL DEFAULT 0,
                    supply_cap INTEGER,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS token_accounts (
                    address TEXT PRIMARY KEY,
                    mint TEXT NOT NULL REFERENCES mints(address),
                    owner TEXT NOT NULL,
                    amount INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_token_accounts_owner "
                "ON token_accounts(owner)"
            )

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "LedgerDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run a block as one exclusive, atomic unit of work.

        Commits on success and rolls back on any exception. Nested calls join
        the outermost transaction, so collaborators sharing this ledger commit
        or roll back together with their caller.
        """
        with self._lock:
            if self.conn.in_transaction:
                yield self.conn
                return

            self.conn.execute("BEGIN IMMEDIATE")
            try:
                yield self.conn
            except BaseException:
                if self.conn.in_transaction:
                    self.conn.execute("ROLLBACK")
                logger.debug("Ledger transaction rolled back")
                raise
            else:
                self.conn.execute("COMMIT")

    def fetch_one(self, sql: str, params: tuple = ()) -> sqlite3.Row | None:
        """Run a read query under the writer lock.

        Readers share the writers' connection, so an unlocked SELECT could see
        another thread's uncommitted transaction.
        """
        with self._lock:
            return self.conn.execute(sql, params).fetchone()

    def fetch_all(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        with self._lock:
            return self.conn.execute(sql, params).fetchall()

    # ── Puzzle state records ──

    def insert_puzzle_state(self, state: PuzzleState) -> None:
        """Create a puzzle-state record if none exists for its seed.

        Raises:
            AlreadyExists: If a record for ``state.seed_id`` is present.
        """
        now = _now_iso()
        with self.transaction() as conn:
            try:
                conn.execute(
                    """
                    INSERT INTO puzzle_states
                        (seed_id, address, difficulty, total_bridges,
                         pathway_a_count, pathway_b_count, pathway_c_count,
                         is_active, fragment_data, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        str(state.seed_id),
                        state.address,
                        state.difficulty,
                        state.total_bridges,
                        state.pathway_a_count,
                        state.pathway_b_count,
                        state.pathway_c_count,
                        int(state.is_active),
                        state.fragment_data,
                        now,
                        now,
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise AlreadyExists(
                    seed_id=state.seed_id, address=state.address
                ) from exc

    def get_puzzle_state(self, seed_id: int) -> PuzzleState | None:
        row = self.fetch_one(
            "SELECT * FROM puzzle_states WHERE seed_id = ?", (str(seed_id),)
        )
        return _row_to_state(row) if row else None

    def list_puzzle_states(self) -> list[PuzzleState]:
        rows = self.fetch_all("SELECT * FROM puzzle_states")
        return sorted((_row_to_state(r) for r in rows), key=lambda s: s.seed_id)

    def increment_counters(self, seed_id: int, pathway: Pathway) -> None:
        """Bump total_bridges and one pathway counter in a single statement."""
        column = _PATHWAY_COLUMNS[pathway]
        with self.transaction() as conn:
            cursor = conn.execute(
                f"""
                UPDATE puzzle_states
                SET total_bridges = total_bridges + 1,
                    {column} = {column} + 1,
                    updated_at = ?
                WHERE seed_id = ?
                """,
                (_now_iso(), str(seed_id)),
            )
            if cursor.rowcount != 1:
                raise LookupError(f"No puzzle state for seed {seed_id}")

    def set_puzzle_active(self, seed_id: int, active: bool) -> None:
        """Administrative toggle for the active gate.

        Not reachable from any program instruction; exists for operators and
        tests that exercise the inactive path.
        """
        with self.transaction() as conn:
            conn.execute(
                "UPDATE puzzle_states SET is_active = ?, updated_at = ? WHERE seed_id = ?",
                (int(active), _now_iso(), str(seed_id)),
            )


def _row_to_state(row: sqlite3.Row) -> PuzzleState:
    return PuzzleState(
        seed_id=int(row["seed_id"]),
        address=row["address"],
        difficulty=row["difficulty"],
        total_bridges=row["total_bridges"],
        pathway_a_count=row["pathway_a_count"],
        pathway_b_count=row["pathway_b_count"],
        pathway_c_count=row["pathway_c_count"],
        is_active=bool(row["is_active"]),
        fragment_data=row["fragment_data"],
    )


def open_ledger_db(path: Path | str) -> LedgerDB:
    return LedgerDB(path)
