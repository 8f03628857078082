"""Billing Events and Ledger Replay

Pure functions that turn the credit transaction log and the usage debit log
into a chronological ledger with a running balance.

Only the current balance is stored. History is replayed on read:
opening = current - sum(all event amounts), then walked forward.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Sequence

from src.domain.billing_policy import DEFAULT_PURCHASE_KEYWORDS

USAGE_DESCRIPTION = "Model usage"


class BillingEventType(str, Enum):
    """Ledger entry types shown to tenants"""
    GRANT = "grant"        # Free allotment, admin adjustment
    PURCHASE = "purchase"  # Completed gateway checkout
    USAGE = "usage"        # Metered model usage (always negative)


@dataclass(frozen=True)
class BillingEvent:
    date: datetime
    type: BillingEventType
    amount_cents: int
    description: str


@dataclass(frozen=True)
class LedgerEntry:
    date: datetime
    type: BillingEventType
    amount_cents: int
    balance_after_cents: int
    description: str


def classify_reason(
    reason: str, purchase_keywords: Sequence[str] = DEFAULT_PURCHASE_KEYWORDS
) -> BillingEventType:
    """Classify a credit transaction reason as PURCHASE or GRANT.

    Case-insensitive substring match against the purchase keywords.
    """
    normalized = (reason or "").lower()
    if any(keyword in normalized for keyword in purchase_keywords):
        return BillingEventType.PURCHASE
    return BillingEventType.GRANT


def credit_event(
    created_at: datetime,
    amount_cents: int,
    reason: str,
    purchase_keywords: Sequence[str] = DEFAULT_PURCHASE_KEYWORDS,
) -> BillingEvent:
    return BillingEvent(
        date=created_at,
        type=classify_reason(reason, purchase_keywords),
        amount_cents=amount_cents,
        description=reason,
    )


def usage_event(created_at: datetime, cost_cents: int) -> BillingEvent:
    return BillingEvent(
        date=created_at,
        type=BillingEventType.USAGE,
        amount_cents=-cost_cents,
        description=USAGE_DESCRIPTION,
    )


def opening_balance(current_balance_cents: int, events: Iterable[BillingEvent]) -> int:
    return current_balance_cents - sum(event.amount_cents for event in events)


def reconstruct_history(
    current_balance_cents: int, events: Iterable[BillingEvent]
) -> List[LedgerEntry]:
    """
    Replay events chronologically and attach the balance after each one.

    Args:
        current_balance_cents: Stored balance at read time
        events: Credit and usage events in any order

    Returns:
        Entries in ascending date order; the last entry's balance_after_cents
        equals current_balance_cents. Equal timestamps keep input order.
    """
    ordered = sorted(events, key=lambda event: event.date)
    running = opening_balance(current_balance_cents, ordered)

    entries: List[LedgerEntry] = []
    for event in ordered:
        running += event.amount_cents
        entries.append(
            LedgerEntry(
                date=event.date,
                type=event.type,
                amount_cents=event.amount_cents,
                balance_after_cents=running,
                description=event.description,
            )
        )
    return entries


def most_recent_first(entries: Sequence[LedgerEntry], limit: int) -> List[LedgerEntry]:
    """Reverse to most-recent-first and cap to `limit` entries"""
    return list(reversed(entries))[:limit]
