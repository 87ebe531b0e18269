"""
Human-readable reports of the group manager, printed by the CLI.
"""

from decimal import Decimal
from typing import List, Optional, Sequence

from group_manager.types.reconciliation import (
    GroupStats,
    ReconciliationResult,
    UserCandidate,
)
from group_manager.types.thresholds import Thresholds


def format_amount(amount: Optional[Decimal]) -> str:
    # Users without a balance are displayed as having none.
    return f"{amount or 0:,.2f}"


def format_user(user: UserCandidate) -> str:
    return f"{user.username} (${format_amount(user.balance)})"


def format_preview(
    promotions: Sequence[UserCandidate], demotions: Sequence[UserCandidate]
) -> List[str]:
    lines = ["=== PREVIEW OF CHANGES ==="]

    if promotions:
        lines.append(f"PROMOTIONS TO VIP ({len(promotions)} users):")
        lines += [f"  -> {format_user(user)}" for user in promotions]

    if demotions:
        lines.append(f"DEMOTIONS FROM VIP ({len(demotions)} users):")
        lines += [f"  -> {format_user(user)}" for user in demotions]

    return lines


def format_promoted(user: UserCandidate) -> str:
    return f"PROMOTED: {format_user(user)} to VIP Group"


def format_demoted(user: UserCandidate) -> str:
    return f"DEMOTED: {format_user(user)} from VIP Group"


def format_summary(result: ReconciliationResult) -> List[str]:
    lines = [
        "=== SUMMARY ===",
        f"Users promoted to VIP: {result.promoted}",
        f"Users demoted from VIP: {result.demoted}",
        f"Total changes applied: {result.total_changes}",
    ]
    lines += [f"ERROR: {error}" for error in result.errors]
    return lines


def format_stats(stats: GroupStats, thresholds: Thresholds) -> List[str]:
    lines = [
        "=== GROUP MANAGER STATISTICS ===",
        f"Total Users: {stats.total_users}",
        f"VIP Users: {stats.group_members}",
        f"Basic Users: {stats.basic_group_members}",
        f"VIP Rate: {stats.group_rate}%",
        f"Users above VIP threshold: {stats.users_above_promotion}",
        f"Users below demotion threshold: {stats.users_below_demotion}",
        f"Average Balance: ${format_amount(stats.average_balance)}",
        f"Highest Balance: ${format_amount(stats.highest_balance)}",
        f"VIP Threshold: ${format_amount(thresholds.promotion_amount)}",
        f"Demotion Threshold: ${format_amount(thresholds.demotion_amount)}",
        "=== PENDING CHANGES ===",
        f"Users eligible for VIP: {stats.pending_promotions}",
        f"VIP users below threshold: {stats.pending_demotions}",
    ]

    if stats.has_pending_changes:
        lines += [
            "Run 'group-manager manage' to apply changes",
            "Run 'group-manager manage --dry-run --detailed' to preview",
        ]

    return lines
