from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from .matcher import LetterStatus

ApprovalStatus = Literal["pending", "approved", "rejected"]
VerdictSource = Literal["oracle", "fallback", "exact"]

DISTRIBUTION_BUCKETS = ("1", "2", "3", "4", "5", "6", "7", "8+")


def empty_distribution() -> Dict[str, int]:
    return {b: 0 for b in DISTRIBUTION_BUCKETS}


class CamelModel(BaseModel):
    """Python names in code, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ───────── Player documents ─────────
class PlayerProgress(CamelModel):
    total_games: int = 0
    total_wins: int = 0
    total_losses: int = 0
    win_rate: int = 0
    current_streak: int = 0
    max_streak: int = 0
    last_played_date: Optional[datetime] = None
    guess_distribution: Dict[str, int] = Field(default_factory=empty_distribution)


class Donations(CamelModel):
    total: float = 0
    count: int = 0


class PlayerDocument(PlayerProgress):
    """Private per-player document: progress plus identity and leaderboard preferences."""
    player_id: str
    email: Optional[EmailStr] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoURL")

    # leaderboard preferences (privacy-first: off until the player opts in)
    display_on_leaderboard: bool = False
    leaderboard_name: Optional[str] = None
    leaderboard_name_approval_status: ApprovalStatus = "approved"
    show_donation_amount: bool = True
    show_streak: bool = True
    message: Optional[str] = None
    message_approval_status: ApprovalStatus = "pending"

    # written by the payment collaborator only
    donations: Donations = Field(default_factory=Donations)

    version: int = 1
    updated_at: Optional[datetime] = None


# ───────── Public leaderboard ─────────
class LeaderboardEntry(CamelModel):
    player_id: str
    display_name: str
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
    amount: float = 0
    current_streak: int = 0
    show_donation_amount: bool = True
    show_streak: bool = True
    message: Optional[str] = None
    approval_status: ApprovalStatus = "pending"
    updated_at: datetime


class PublicLeaderboardItem(CamelModel):
    """Leaderboard entry as rendered: hidden fields are blanked."""
    player_id: str
    display_name: str
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
    amount: Optional[float] = None
    current_streak: Optional[int] = None
    message: Optional[str] = None
    updated_at: datetime


class LeaderboardResponse(CamelModel):
    count: int
    items: List[PublicLeaderboardItem]


# ───────── Guessing ─────────
class SemanticVerdict(CamelModel):
    is_valid_word: bool
    similarity: int = Field(ge=0, le=100)
    hint: str = ""
    source: VerdictSource


class GuessIn(CamelModel):
    player_id: Optional[str] = None
    guess_word: str
    previous_hints: List[str] = Field(default_factory=list)
    date: Optional[str] = None


class GuessOut(CamelModel):
    is_valid_word: bool
    similarity: int
    hint: str
    letter_status: List[LetterStatus]
    source: VerdictSource


class PuzzleInfo(CamelModel):
    date: str
    number: int
    length: int


# ───────── Player endpoints ─────────
class PlayerIn(CamelModel):
    email: Optional[EmailStr] = None
    display_name: Optional[str] = Field(default=None, max_length=128)
    photo_url: Optional[str] = Field(default=None, alias="photoURL", max_length=1024)


class CompleteGameIn(CamelModel):
    won: bool
    guess_count: int = Field(ge=1)


class ProfileUpdateIn(CamelModel):
    leaderboard_name: Optional[str] = Field(default=None, max_length=64)
    message: Optional[str] = Field(default=None, max_length=280)
    display_on_leaderboard: Optional[bool] = None
    show_donation_amount: Optional[bool] = None
    show_streak: Optional[bool] = None


class ResyncOut(CamelModel):
    upserted: int
    removed: int
    stale: int
    failed: int
