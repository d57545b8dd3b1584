"""
Domain models - the core of business logic.
These models are transport-agnostic (work with Supabase rows, the in-memory store, HTTP, etc.)
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from enum import Enum


# === ENUMS ===

class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
    MODERATOR = "moderator"


class ActivityType(str, Enum):
    REGISTRATION = "registration"
    LOGIN = "login"
    TOURNAMENT_JOIN = "tournament_join"
    REWARD_CLAIM = "reward_claim"
    PROFILE_UPDATE = "profile_update"
    POINTS_EARNED = "points_earned"


class ClaimStatus(str, Enum):
    CLAIMED = "claimed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


class TournamentStatus(str, Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ParticipationStatus(str, Enum):
    REGISTERED = "registered"
    ACTIVE = "active"
    COMPLETED = "completed"
    DISQUALIFIED = "disqualified"


# === USER ===

class UserCreate(BaseModel):
    """Data for creating a new user. `password` is already hashed."""
    username: str
    email: str
    password: str
    role: UserRole = UserRole.USER
    points: int = Field(default=0, ge=0)


class User(BaseModel):
    """Full user model, including the password hash"""
    id: UUID
    username: str
    email: str
    password: str
    role: UserRole = UserRole.USER
    avatar: Optional[str] = None
    points: int = Field(default=0, ge=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    def public(self) -> "PublicUser":
        return PublicUser(**self.model_dump(exclude={"password"}))


class PublicUser(BaseModel):
    """User as returned to callers - never carries the password hash"""
    id: UUID
    username: str
    email: str
    role: UserRole
    avatar: Optional[str] = None
    points: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdate(BaseModel):
    """Profile fields a user may change. Points are ledger-only."""
    username: Optional[str] = None
    avatar: Optional[str] = None


# === REWARDS ===

class Reward(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    points_required: int = Field(gt=0)
    category: str = "general"
    image_url: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RewardSummary(BaseModel):
    """Reward fields echoed back with a claim"""
    id: UUID
    title: str
    category: str
    points_required: int
    stock: int


class Claim(BaseModel):
    """A user redeeming a reward (`user_rewards` row). Immutable."""
    id: UUID
    user_id: UUID
    reward_id: UUID
    status: ClaimStatus = ClaimStatus.CLAIMED
    redeemed_at: Optional[datetime] = None


class ClaimWithReward(Claim):
    reward: Optional[Reward] = None


class ClaimResult(BaseModel):
    """Outcome of a successful claim"""
    claim: Claim
    reward: RewardSummary
    points_balance: int


# === ACTIVITY ===

class ActivityCreate(BaseModel):
    user_id: UUID
    activity_type: ActivityType
    description: str
    points_change: int = 0
    tournament_id: Optional[UUID] = None
    reward_id: Optional[UUID] = None


class ActivityEntry(ActivityCreate):
    """Append-only audit record"""
    id: UUID
    created_at: Optional[datetime] = None


# === TOURNAMENTS ===

class Tournament(BaseModel):
    id: UUID
    title: str
    game_name: str
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    prize_pool: Optional[str] = None
    max_participants: int = 100
    status: TournamentStatus = TournamentStatus.UPCOMING
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None


class Participation(BaseModel):
    """`user_participation` row"""
    id: UUID
    user_id: UUID
    tournament_id: UUID
    status: ParticipationStatus = ParticipationStatus.REGISTERED
    joined_at: Optional[datetime] = None
    tournament: Optional[Tournament] = None


# === SESSIONS ===

class SessionClaims(BaseModel):
    """Identity recovered from a verified token"""
    user_id: UUID
    role: UserRole
    email: Optional[str] = None
    name: Optional[str] = None
    issued_at: datetime
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class AuthResult(BaseModel):
    token: str
    user: PublicUser


# === DASHBOARD ===

class DashboardStats(BaseModel):
    total_tournaments: int = 0
    total_rewards: int = 0
    total_points: int = 0


class Dashboard(BaseModel):
    user: PublicUser
    tournaments: List[Participation] = Field(default_factory=list)
    rewards: List[ClaimWithReward] = Field(default_factory=list)
    activity: List[ActivityEntry] = Field(default_factory=list)
    stats: DashboardStats
