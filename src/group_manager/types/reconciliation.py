from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class UserCandidate:
    id: int
    username: str
    balance: Optional[Decimal]


@dataclass
class ReconciliationResult:
    promoted: int = 0
    demoted: int = 0
    errors: List[str] = field(default_factory=list)
    promoted_users: List[UserCandidate] = field(default_factory=list)
    demoted_users: List[UserCandidate] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        return self.promoted + self.demoted


@dataclass
class GroupStats:
    total_users: int
    group_members: int
    basic_group_members: int
    users_above_promotion: int
    users_below_demotion: int
    average_balance: Optional[Decimal]
    highest_balance: Optional[Decimal]
    pending_promotions: int
    pending_demotions: int

    @property
    def group_rate(self) -> float:
        """Percentage of users in the promotion group."""
        return round(self.group_members / max(self.total_users, 1) * 100, 2)

    @property
    def has_pending_changes(self) -> bool:
        return self.pending_promotions > 0 or self.pending_demotions > 0
