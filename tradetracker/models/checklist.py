"""ChecklistEntry data model."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from tradetracker.models.base import JournalModel

# Self-evaluation questions, then commitments. Order is fixed.
CHECKLIST_FLAGS: tuple[tuple[str, str], ...] = (
    ("environment_ready", "Is my environment set up for this session?"),
    ("mentally_ready", "Do I feel mentally ready for this session?"),
    ("emotionally_ready_primary", "Do I feel emotionally steady for this session?"),
    ("emotionally_ready_secondary", "Do I feel emotionally ready for this session?"),
    ("commits_rules", "I only enter trades based on rules and strategy."),
    ("commits_stop_limit", "I stop trading once I hit my daily profit/loss limit."),
    ("commits_risk_sizing", "I do not overcommit on lot sizing."),
    ("commits_confirmation_only", "I only trade on confirmation."),
)

FLAG_NAMES: tuple[str, ...] = tuple(name for name, _ in CHECKLIST_FLAGS)


class ChecklistEntry(JournalModel):
    """Represents a pre-session readiness checklist."""

    kind: Literal["checklist"] = "checklist"
    id: Optional[str] = Field(default=None, description="Storage ID")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp (UTC)")

    trading_date: str = Field(..., description="Trading date (YYYY-MM-DD)")
    session_name: Optional[str] = Field(default=None, description="Session label")

    environment_ready: bool = Field(default=False)
    mentally_ready: bool = Field(default=False)
    emotionally_ready_primary: bool = Field(default=False)
    emotionally_ready_secondary: bool = Field(default=False)
    commits_rules: bool = Field(default=False)
    commits_stop_limit: bool = Field(default=False)
    commits_risk_sizing: bool = Field(default=False)
    commits_confirmation_only: bool = Field(default=False)

    signature: str = Field(default="", description="Free-text signature")
    notes: Optional[str] = Field(default=None, description="User notes")
    score: Optional[float] = Field(default=None, ge=0, le=100, description="Readiness score")

    @field_validator(*FLAG_NAMES, mode="before")
    @classmethod
    def _only_true_counts(cls, value):
        return value is True

    @field_validator("signature", mode="before")
    @classmethod
    def _signature_text(cls, value):
        return value if isinstance(value, str) else ""

    def flags(self) -> list[bool]:
        """Return the eight readiness flags in their fixed order."""
        return [getattr(self, name) for name in FLAG_NAMES]
