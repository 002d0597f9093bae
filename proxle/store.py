# proxle/store.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .config import PROGRESS_MAX_RETRIES, TZ
from .leaderboard import PlayerProgressChanged, apply_change, insert_for
from .models import PlayerRow
from .progression import apply_game_result, as_utc
from .schema import Donations, PlayerDocument, PlayerIn, ProfileUpdateIn, empty_distribution

logger = logging.getLogger(__name__)

ANONYMOUS = "Anonymous"

# PlayerDocument fields that map 1:1 onto PlayerRow columns
_COLUMNS = (
    "email", "display_name", "photo_url",
    "total_games", "total_wins", "total_losses", "win_rate",
    "current_streak", "max_streak", "last_played_date", "guess_distribution",
    "display_on_leaderboard", "leaderboard_name", "leaderboard_name_approval_status",
    "show_donation_amount", "show_streak", "message", "message_approval_status",
)


class PlayerNotFoundError(LookupError):
    pass


class ProgressConflictError(RuntimeError):
    """Concurrent writers kept winning; the game result was NOT recorded."""


# ───────── Row <-> document ─────────
def row_to_document(row: PlayerRow) -> PlayerDocument:
    distribution = empty_distribution()
    distribution.update(row.guess_distribution or {})
    return PlayerDocument(
        player_id=row.id,
        email=row.email,
        display_name=row.display_name,
        photo_url=row.photo_url,
        total_games=row.total_games or 0,
        total_wins=row.total_wins or 0,
        total_losses=row.total_losses or 0,
        win_rate=row.win_rate or 0,
        current_streak=row.current_streak or 0,
        max_streak=row.max_streak or 0,
        last_played_date=as_utc(row.last_played_date) if row.last_played_date else None,
        guess_distribution=distribution,
        display_on_leaderboard=bool(row.display_on_leaderboard),
        leaderboard_name=row.leaderboard_name,
        leaderboard_name_approval_status=row.leaderboard_name_approval_status or "approved",
        show_donation_amount=row.show_donation_amount is not False,
        show_streak=row.show_streak is not False,
        message=row.message,
        message_approval_status=row.message_approval_status or "pending",
        donations=Donations(total=row.donations_total or 0, count=row.donations_count or 0),
        version=row.version or 1,
        updated_at=as_utc(row.updated_at) if row.updated_at else None,
    )


def document_values(doc: PlayerDocument) -> Dict[str, Any]:
    return {name: getattr(doc, name) for name in _COLUMNS}


# ───────── Reads ─────────
async def _load_row(db: AsyncSession, player_id: str) -> Optional[PlayerRow]:
    res = await db.execute(
        select(PlayerRow).where(PlayerRow.id == player_id).execution_options(populate_existing=True)
    )
    return res.scalar_one_or_none()


async def get_player(db: AsyncSession, player_id: str) -> PlayerDocument:
    row = await _load_row(db, player_id)
    if row is None:
        raise PlayerNotFoundError(player_id)
    return row_to_document(row)


async def ensure_player(
    db: AsyncSession, player_id: str, data: PlayerIn, now: Optional[datetime] = None
) -> Tuple[PlayerDocument, Optional[PlayerProgressChanged]]:
    """Create the player document on first sign-in, otherwise just mark them active."""
    now = now or datetime.now(TZ)
    row = await _load_row(db, player_id)
    if row is not None:
        row.last_active_at = now
        await db.commit()
        return row_to_document(row), None

    # INSERT; first sign-in wins when two devices race
    stmt = insert_for(db)(PlayerRow).values(
        id=player_id,
        email=data.email,
        display_name=data.display_name,
        photo_url=data.photo_url,
        total_games=0,
        total_wins=0,
        total_losses=0,
        win_rate=0,
        current_streak=0,
        max_streak=0,
        guess_distribution=empty_distribution(),
        display_on_leaderboard=False,
        leaderboard_name=ANONYMOUS,
        leaderboard_name_approval_status="approved",
        show_donation_amount=True,
        show_streak=True,
        message_approval_status="pending",
        donations_total=0,
        donations_count=0,
        version=1,
        created_at=now,
        updated_at=now,
        last_active_at=now,
    ).on_conflict_do_nothing(index_elements=[PlayerRow.id])
    res = await db.execute(stmt)
    await db.commit()
    created = res.rowcount == 1

    # Read back (handles race)
    row = await _load_row(db, player_id)
    if row is None:
        raise PlayerNotFoundError(player_id)
    doc = row_to_document(row)
    if not created:
        return doc, None

    logger.info("Created player document for %s", player_id)
    return doc, PlayerProgressChanged(player_id=player_id, before=None, after=doc)


# ───────── Atomic read-modify-write ─────────
async def _apply_versioned_update(
    db: AsyncSession, player_id: str, expected_version: int, values: Dict[str, Any]
) -> bool:
    """Conditional UPDATE; False when another writer got there first."""
    res = await db.execute(
        update(PlayerRow)
        .where(PlayerRow.id == player_id, PlayerRow.version == expected_version)
        .values(**values, version=expected_version + 1)
        .execution_options(synchronize_session=False)
    )
    return res.rowcount == 1


async def read_modify_write(
    db: AsyncSession,
    player_id: str,
    mutate: Callable[[PlayerDocument], PlayerDocument],
    max_retries: int = PROGRESS_MAX_RETRIES,
    now: Optional[datetime] = None,
) -> PlayerProgressChanged:
    """
    Apply `mutate` to the current document under compare-and-swap.

    Retries on version conflicts up to `max_retries` times, then raises
    ProgressConflictError rather than dropping the change.
    """
    for attempt in range(1, max_retries + 1):
        row = await _load_row(db, player_id)
        if row is None:
            raise PlayerNotFoundError(player_id)
        before = row_to_document(row)
        after = mutate(before)

        stamp = now or datetime.now(TZ)
        values = document_values(after)
        values["updated_at"] = stamp
        if await _apply_versioned_update(db, player_id, before.version, values):
            await db.commit()
            after = after.model_copy(update={"version": before.version + 1, "updated_at": stamp})
            return PlayerProgressChanged(player_id=player_id, before=before, after=after)

        await db.rollback()
        logger.debug("Version conflict on player %s (attempt %d/%d)", player_id, attempt, max_retries)

    logger.warning("Giving up on player %s after %d conflicting attempts", player_id, max_retries)
    raise ProgressConflictError(f"could not update player {player_id}: too many concurrent updates")


async def complete_game(
    db: AsyncSession,
    player_id: str,
    won: bool,
    guess_count: int,
    now: Optional[datetime] = None,
) -> PlayerProgressChanged:
    now = now or datetime.now(TZ)

    def mutate(doc: PlayerDocument) -> PlayerDocument:
        return apply_game_result(doc, won, guess_count, now=now)

    change = await read_modify_write(db, player_id, mutate, now=now)
    logger.info(
        "Recorded game for %s: won=%s guesses=%d streak=%d",
        player_id, won, guess_count, change.after.current_streak,
    )
    return change


def apply_profile_update(doc: PlayerDocument, changes: ProfileUpdateIn) -> PlayerDocument:
    """Preference changes; new messages and aliases go back through approval."""
    data = changes.model_dump(exclude_unset=True)
    # null clears text fields; flags keep their value
    update_: Dict[str, Any] = {
        k: v for k, v in data.items()
        if k in _COLUMNS and (v is not None or k in ("leaderboard_name", "message"))
    }

    if "message" in data:
        update_["message_approval_status"] = "pending"

    name = data.get("leaderboard_name")
    if "leaderboard_name" in data and name != ANONYMOUS and name != doc.leaderboard_name:
        update_["leaderboard_name_approval_status"] = "pending"

    return doc.model_copy(update=update_)


async def update_profile(
    db: AsyncSession, player_id: str, changes: ProfileUpdateIn
) -> PlayerProgressChanged:
    return await read_modify_write(db, player_id, lambda doc: apply_profile_update(doc, changes))


async def resync_leaderboard(db: AsyncSession) -> Dict[str, int]:
    """Re-derive every public entry from its player document."""
    counts = {"upserted": 0, "removed": 0, "stale": 0, "failed": 0}
    res = await db.execute(select(PlayerRow.id).order_by(PlayerRow.id))
    for player_id in res.scalars().all():
        try:
            doc = await get_player(db, player_id)
            outcome = await apply_change(db, PlayerProgressChanged(player_id=player_id, before=None, after=doc))
        except PlayerNotFoundError:
            continue
        except SQLAlchemyError:
            await db.rollback()
            logger.exception("Resync failed for player %s", player_id)
            outcome = "failed"
        counts[outcome] += 1
    logger.info("Leaderboard resync finished: %s", counts)
    return counts
