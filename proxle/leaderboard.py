# proxle/leaderboard.py
"""
Public leaderboard projection.

Every persisted change to a player document is turned into a
PlayerProgressChanged event; `apply_change` derives the public entry (or
its absence) from the event's `after` state and writes it. Writes are
conditional on the source timestamp, so replays and out-of-order
deliveries for one player converge on the newest source state.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from .config import TZ
from .db_pg import SessionLocal
from .models import LeaderboardRow
from .progression import as_utc
from .schema import LeaderboardEntry, PlayerDocument, PublicLeaderboardItem

logger = logging.getLogger(__name__)

SyncOutcome = Literal["upserted", "removed", "stale", "failed"]

ANONYMOUS = "Anonymous"


@dataclass(frozen=True)
class PlayerProgressChanged:
    player_id: str
    before: Optional[PlayerDocument]
    after: Optional[PlayerDocument]  # None when the player document was deleted


def display_name_for(doc: PlayerDocument) -> str:
    for name in (doc.leaderboard_name, doc.display_name):
        if name and name.strip():
            return name.strip()
    return ANONYMOUS


def build_entry(doc: PlayerDocument, now: Optional[datetime] = None) -> Optional[LeaderboardEntry]:
    """The public entry for a player document, or None when they have not opted in."""
    if not doc.display_on_leaderboard:
        return None
    stamp = doc.updated_at or now or datetime.now(TZ)
    return LeaderboardEntry(
        player_id=doc.player_id,
        display_name=display_name_for(doc),
        photo_url=doc.photo_url,
        amount=doc.donations.total,
        current_streak=doc.current_streak,
        show_donation_amount=doc.show_donation_amount,
        show_streak=doc.show_streak,
        message=doc.message,
        approval_status=doc.message_approval_status,
        updated_at=as_utc(stamp),
    )


def insert_for(db: AsyncSession):
    return pg_insert if db.get_bind().dialect.name == "postgresql" else sqlite_insert


async def upsert_entry(db: AsyncSession, entry: LeaderboardEntry) -> bool:
    """Merge `entry` into the public table unless a newer one is already there."""
    values = {
        "player_id": entry.player_id,
        "display_name": entry.display_name,
        "photo_url": entry.photo_url,
        "amount": entry.amount,
        "current_streak": entry.current_streak,
        "show_donation_amount": entry.show_donation_amount,
        "show_streak": entry.show_streak,
        "message": entry.message,
        "approval_status": entry.approval_status,
        "updated_at": entry.updated_at,
    }
    stmt = insert_for(db)(LeaderboardRow).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=[LeaderboardRow.player_id],
        set_={k: v for k, v in values.items() if k != "player_id"},
        where=LeaderboardRow.updated_at <= stmt.excluded.updated_at,
    )
    res = await db.execute(stmt)
    return res.rowcount != 0


async def remove_entry(db: AsyncSession, player_id: str, as_of: Optional[datetime]) -> bool:
    stmt = delete(LeaderboardRow).where(LeaderboardRow.player_id == player_id)
    if as_of is not None:
        stmt = stmt.where(LeaderboardRow.updated_at <= as_utc(as_of))
    res = await db.execute(stmt)
    return res.rowcount != 0


async def apply_change(db: AsyncSession, event: PlayerProgressChanged) -> SyncOutcome:
    """
    Bring the public entry for `event.player_id` in line with `event.after`.

    Raises on database errors; the player document is never touched here,
    so the same event can simply be applied again.
    """
    after = event.after
    entry = build_entry(after) if after is not None else None

    if entry is None:
        as_of = after.updated_at if after is not None else None
        removed = await remove_entry(db, event.player_id, as_of)
        await db.commit()
        logger.info("Player %s is off the leaderboard (entry removed: %s)", event.player_id, removed)
        return "removed"

    written = await upsert_entry(db, entry)
    await db.commit()
    if not written:
        logger.info("Skipped stale leaderboard update for %s", event.player_id)
        return "stale"

    logger.info(
        "Synced leaderboard entry for %s: name=%r amount=%s streak=%d",
        event.player_id, entry.display_name, entry.amount, entry.current_streak,
    )
    return "upserted"


async def sync_player_change(event: PlayerProgressChanged) -> SyncOutcome:
    """Background reaction to a player write. Failures are logged, never raised."""
    try:
        async with SessionLocal() as db:
            return await apply_change(db, event)
    except Exception:
        logger.exception("Leaderboard sync failed for %s; safe to retry", event.player_id)
        return "failed"


# ───────── Reads ─────────
def to_public(row: LeaderboardRow) -> PublicLeaderboardItem:
    return PublicLeaderboardItem(
        player_id=row.player_id,
        display_name=row.display_name,
        photo_url=row.photo_url,
        amount=row.amount if row.show_donation_amount else None,
        current_streak=row.current_streak if row.show_streak else None,
        message=row.message if row.approval_status == "approved" else None,
        updated_at=as_utc(row.updated_at),
    )


async def list_entries(db: AsyncSession, limit: int = 100) -> list[PublicLeaderboardItem]:
    res = await db.execute(
        select(LeaderboardRow)
        .order_by(LeaderboardRow.amount.desc(), LeaderboardRow.current_streak.desc(), LeaderboardRow.player_id)
        .limit(limit)
    )
    return [to_public(r) for r in res.scalars().all()]


async def get_entry(db: AsyncSession, player_id: str) -> Optional[LeaderboardEntry]:
    row = await db.get(LeaderboardRow, player_id, populate_existing=True)
    if row is None:
        return None
    return LeaderboardEntry(
        player_id=row.player_id,
        display_name=row.display_name,
        photo_url=row.photo_url,
        amount=row.amount,
        current_streak=row.current_streak,
        show_donation_amount=row.show_donation_amount,
        show_streak=row.show_streak,
        message=row.message,
        approval_status=row.approval_status,
        updated_at=as_utc(row.updated_at),
    )
