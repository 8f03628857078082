"""Billing Policy

Immutable configuration handed to billing components at construction.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

# Seed grant for new tenants (observed signup provisioning value, in cents)
INITIAL_CREDIT_CENTS = 1000

DEFAULT_CHECKOUT_AMOUNTS = frozenset({10, 25, 50, 100})
DEFAULT_PURCHASE_KEYWORDS = ("purchase", "stripe", "checkout")
DEFAULT_ALERT_THRESHOLDS = (50, 10, 5)


@dataclass(frozen=True)
class BillingPolicy:
    initial_credit_cents: int = INITIAL_CREDIT_CENTS
    allowed_checkout_amounts: FrozenSet[int] = field(default=DEFAULT_CHECKOUT_AMOUNTS)
    purchase_keywords: Tuple[str, ...] = DEFAULT_PURCHASE_KEYWORDS
    alert_thresholds: Tuple[int, ...] = DEFAULT_ALERT_THRESHOLDS
    history_limit: int = 120
    usage_window_days: int = 30
    agent_stats_limit: int = 12

    @classmethod
    def from_config(cls, config) -> "BillingPolicy":
        """Build the policy from an ApplicationConfig-like object"""
        return cls(
            initial_credit_cents=int(config.INITIAL_CREDIT_CENTS),
            allowed_checkout_amounts=frozenset(int(a) for a in config.CHECKOUT_ALLOWED_AMOUNTS),
            purchase_keywords=tuple(k.lower() for k in config.PURCHASE_KEYWORDS),
            alert_thresholds=tuple(sorted((int(t) for t in config.BALANCE_ALERT_THRESHOLDS), reverse=True)),
            history_limit=int(config.LEDGER_HISTORY_LIMIT),
            usage_window_days=int(config.USAGE_WINDOW_DAYS),
            agent_stats_limit=int(config.AGENT_STATS_LIMIT),
        )
