# proxle/main.py
from __future__ import annotations

import logging
import secrets
from typing import Optional

from fastapi import BackgroundTasks, Depends, FastAPI, Header, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession

from .config import ADMIN_TOKEN, CORS_ORIGINS, LOG_LEVEL, PUZZLE_EPOCH
from .daily_word import InvalidDateError, parse_puzzle_date, puzzle_number, word_for_date
from .db_pg import create_tables, get_db, ping
from .game import InvalidGuessError, submit_guess
from .hint_client import HintClient
from .leaderboard import list_entries, sync_player_change
from .progression import InvalidGameResultError
from .schema import (
    CompleteGameIn,
    GuessIn,
    GuessOut,
    LeaderboardResponse,
    PlayerDocument,
    PlayerIn,
    ProfileUpdateIn,
    PuzzleInfo,
    ResyncOut,
)
from .store import (
    PlayerNotFoundError,
    ProgressConflictError,
    complete_game,
    ensure_player,
    get_player,
    resync_leaderboard,
    update_profile,
)
from .word_list import DEFAULT_CATALOG, WordCatalog

logger = logging.getLogger(__name__)

# ───────── App ─────────
app = FastAPI(title="Proxle API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)

# ───────── Dependencies ─────────
def get_catalog() -> WordCatalog:
    return DEFAULT_CATALOG

def get_hint_client() -> HintClient:
    return HintClient()

def require_admin(x_admin_token: Optional[str] = Header(None)) -> None:
    if not ADMIN_TOKEN or not x_admin_token or not secrets.compare_digest(x_admin_token, ADMIN_TOKEN):
        raise HTTPException(status_code=403, detail="Admin token required")

# ───────── Lifecycle ─────────
@app.on_event("startup")
async def on_startup():
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    await ping()
    await create_tables()

@app.get("/healthz")
async def healthz():
    return {"ok": True}

# ───────── Puzzle ─────────
@app.get("/puzzle", response_model=PuzzleInfo)
async def puzzle(
    date: Optional[str] = Query(None, description="YYYY-MM-DD; defaults to today (UTC)"),
    catalog: WordCatalog = Depends(get_catalog),
):
    try:
        day = parse_puzzle_date(date)
    except InvalidDateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    # length only: the word itself never leaves the server
    word = word_for_date(catalog, PUZZLE_EPOCH, day)
    return PuzzleInfo(date=day.isoformat(), number=puzzle_number(day), length=len(word))

@app.post("/guess", response_model=GuessOut)
async def guess(
    payload: GuessIn,
    catalog: WordCatalog = Depends(get_catalog),
    hint_client: HintClient = Depends(get_hint_client),
):
    try:
        return await submit_guess(
            payload.guess_word,
            payload.previous_hints,
            ymd=payload.date,
            hint_client=hint_client,
            catalog=catalog,
            player_id=payload.player_id,
        )
    except (InvalidGuessError, InvalidDateError) as e:
        raise HTTPException(status_code=400, detail=str(e))

# ───────── Players ─────────
@app.post("/players/{player_id}", response_model=PlayerDocument)
async def upsert_player(
    player_id: str,
    payload: PlayerIn,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    doc, change = await ensure_player(db, player_id, payload)
    if change is not None:
        background_tasks.add_task(sync_player_change, change)
    return doc

@app.get("/players/{player_id}/stats", response_model=PlayerDocument, response_model_exclude={"email"})
async def player_stats(player_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await get_player(db, player_id)
    except PlayerNotFoundError:
        raise HTTPException(status_code=404, detail="Player not found")

@app.post("/players/{player_id}/complete-game", response_model=PlayerDocument)
async def finish_game(
    player_id: str,
    payload: CompleteGameIn,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    try:
        change = await complete_game(db, player_id, payload.won, payload.guess_count)
    except PlayerNotFoundError:
        raise HTTPException(status_code=404, detail="Player not found")
    except InvalidGameResultError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProgressConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

    background_tasks.add_task(sync_player_change, change)
    return change.after

@app.patch("/players/{player_id}/profile", response_model=PlayerDocument)
async def edit_profile(
    player_id: str,
    payload: ProfileUpdateIn,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    try:
        change = await update_profile(db, player_id, payload)
    except PlayerNotFoundError:
        raise HTTPException(status_code=404, detail="Player not found")
    except ProgressConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

    background_tasks.add_task(sync_player_change, change)
    return change.after

# ───────── Leaderboard ─────────
@app.get("/leaderboard", response_model=LeaderboardResponse)
async def leaderboard(
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    items = await list_entries(db, limit=limit)
    return LeaderboardResponse(count=len(items), items=items)

@app.post("/admin/leaderboard/resync", response_model=ResyncOut, dependencies=[Depends(require_admin)])
async def resync(db: AsyncSession = Depends(get_db)):
    counts = await resync_leaderboard(db)
    return ResyncOut(**counts)
