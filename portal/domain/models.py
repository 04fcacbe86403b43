"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Every record lives in the key-value store as JSON text. Pydantic validates
what comes back out of the store (a hand-edited or truncated value fails
loudly instead of leaking into the services) and gives us
serialization/deserialization for free.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class Priority(str, Enum):
    """Work item priority levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class User(BaseModel):
    """Public view of an account. Never carries the password."""
    email: str


class Credential(BaseModel):
    """
    Stored login record.

    The password is kept as a bcrypt hash, never in plaintext.
    """
    email: str = Field(..., min_length=1)
    password_hash: str


class Session(BaseModel):
    """
    The currently authenticated user.

    Returned by login/register and passed explicitly into anything that
    needs an authenticated user (see DashboardView).
    """
    model_config = ConfigDict(frozen=True)

    email: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def user(self) -> User:
        return User(email=self.email)


class WorkItem(BaseModel):
    """
    A synthetic task assigned to one owner.

    Example id: "john_3" is the third item of john@company.com
    """
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    category: str
    priority: Priority
    due_date: datetime
    owner_email: str


class CheckboxState(BaseModel):
    """Latest completion flag for one (owner, item) pair"""
    item_id: str
    checked: bool
    last_updated: datetime


class AuditLogEntry(BaseModel):
    """
    Latest change for one (owner, item) pair.

    The audit log keeps at most one entry per pair; see AuditEvent for the
    full history.
    """
    owner_email: str
    item_id: str
    checked: bool
    timestamp: datetime


class AuditEvent(BaseModel):
    """A single checkbox change, appended to the history and never rewritten"""
    owner_email: str
    item_id: str
    checked: bool
    timestamp: datetime


class ItemFilter(BaseModel):
    """
    Dashboard table filters.

    "all" disables the category/priority filters, an empty search matches
    everything.
    """
    search: str = ""
    category: str = "all"
    priority: str = "all"


class DashboardStats(BaseModel):
    """Summary cards shown above the item table"""
    total_items: int = 0
    checked_items: int = 0
    high_priority: int = 0
    completion_rate: int = 0  # percent, rounded


class PortalOptions(BaseModel):
    """
    Behaviour options.

    Loaded from settings.yaml so demos and tests can tune the portal
    without touching code.
    """
    # Multiplier for the simulated network delays (0 disables them)
    latency_scale: float = Field(default=0.0, ge=0.0, description="Scale factor for simulated latency")

    # Accounts
    seed_demo_users: bool = Field(default=True, description="Create demo accounts when none exist")
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, description="bcrypt cost factor")
    min_password_length: int = Field(default=6, ge=1, description="Minimum length for new passwords")

    # Audit
    keep_history: bool = Field(default=True, description="Append every checkbox change to the history")
