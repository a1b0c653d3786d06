"""SQLite persistence for accounts and their linked providers."""

from __future__ import annotations

from pathlib import Path

import aiosqlite

_SCHEMA = """
-- One row per user account, keyed by email
CREATE TABLE IF NOT EXISTS accounts (
    id TEXT PRIMARY KEY,
    email TEXT UNIQUE NOT NULL,
    display_name TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Providers linked to an account; seq order is the precedence reported on lookup
CREATE TABLE IF NOT EXISTS linked_providers (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id TEXT NOT NULL REFERENCES accounts(id),
    provider_id TEXT NOT NULL,
    provider_uid TEXT NOT NULL,
    linked_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    UNIQUE (account_id, provider_id),
    UNIQUE (provider_id, provider_uid)
);
"""


class StorageEngine:
    """Async SQLite storage for the local identity backend."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Open connection and create schema."""
        self._db = await aiosqlite.connect(str(self.db_path))
        self._db.row_factory = aiosqlite.Row
        await self._db.executescript(_SCHEMA)
        await self._db.commit()

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    @property
    def db(self) -> aiosqlite.Connection:
        if self._db is None:
            raise RuntimeError("StorageEngine not initialized. Call initialize() first")
        return self._db

    # ----- Accounts -----

    async def create_account(
        self,
        *,
        account_id: str,
        email: str,
        display_name: str | None = None,
    ) -> None:
        await self.db.execute(
            "INSERT INTO accounts (id, email, display_name) VALUES (?, ?, ?)",
            (account_id, email.lower(), display_name),
        )
        await self.db.commit()

    async def create_account_with_provider(
        self,
        *,
        account_id: str,
        email: str,
        provider_id: str,
        provider_uid: str,
        display_name: str | None = None,
    ) -> None:
        """Create an account and its first linked provider in one transaction."""
        try:
            await self.db.execute(
                "INSERT INTO accounts (id, email, display_name) VALUES (?, ?, ?)",
                (account_id, email.lower(), display_name),
            )
            await self.db.execute(
                """INSERT INTO linked_providers (account_id, provider_id, provider_uid)
                   VALUES (?, ?, ?)""",
                (account_id, provider_id, provider_uid),
            )
        except aiosqlite.Error:
            await self.db.rollback()
            raise
        await self.db.commit()

    async def get_account(self, account_id: str) -> dict | None:
        cursor = await self.db.execute("SELECT * FROM accounts WHERE id = ?", (account_id,))
        row = await cursor.fetchone()
        return dict(row) if row else None

    async def get_account_by_email(self, email: str) -> dict | None:
        cursor = await self.db.execute(
            "SELECT * FROM accounts WHERE email = ?", (email.lower(),)
        )
        row = await cursor.fetchone()
        return dict(row) if row else None

    async def list_accounts(self) -> list[dict]:
        cursor = await self.db.execute("SELECT * FROM accounts ORDER BY created_at, email")
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    # ----- Linked providers -----

    async def link_provider(
        self,
        *,
        account_id: str,
        provider_id: str,
        provider_uid: str,
    ) -> None:
        await self.db.execute(
            """INSERT INTO linked_providers (account_id, provider_id, provider_uid)
               VALUES (?, ?, ?)
               ON CONFLICT(account_id, provider_id) DO UPDATE SET
                 provider_uid=excluded.provider_uid""",
            (account_id, provider_id, provider_uid),
        )
        await self.db.commit()

    async def list_linked_providers(self, email: str) -> list[str]:
        """Provider ids linked to the account for ``email``, in link order."""
        cursor = await self.db.execute(
            """SELECT lp.provider_id FROM linked_providers lp
               JOIN accounts a ON a.id = lp.account_id
               WHERE a.email = ?
               ORDER BY lp.seq""",
            (email.lower(),),
        )
        rows = await cursor.fetchall()
        return [row["provider_id"] for row in rows]

    async def find_account_by_provider(self, provider_id: str, provider_uid: str) -> dict | None:
        cursor = await self.db.execute(
            """SELECT a.* FROM accounts a
               JOIN linked_providers lp ON a.id = lp.account_id
               WHERE lp.provider_id = ? AND lp.provider_uid = ?""",
            (provider_id, provider_uid),
        )
        row = await cursor.fetchone()
        return dict(row) if row else None
