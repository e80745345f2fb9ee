"""Subscription Status — derived liveness of a stored subscription.

Invariants:
    - is_active(sub, now) is True iff now < sub.expires_at (strict)
    - is_active never raises and never mutates
    - require_active raises SubscriptionExpiredError exactly when is_active is False
"""

from submarket.core.domain_types import UnixTimestamp
from submarket.core.errors import ErrorContext, SubscriptionExpiredError
from submarket.core.records import SubscriptionRecord


def is_active(subscription: SubscriptionRecord, now: UnixTimestamp) -> bool:
    return now < subscription.expires_at


def require_active(subscription: SubscriptionRecord, now: UnixTimestamp) -> None:
    """Gate for operations that need a live subscription."""
    if not is_active(subscription, now):
        raise SubscriptionExpiredError(
            subscription.expires_at,
            ErrorContext(
                identity=subscription.subscriber,
                address=subscription.address,
                operation="require_active",
            ),
        )


def seconds_remaining(subscription: SubscriptionRecord, now: UnixTimestamp) -> int:
    return max(0, subscription.expires_at - now)
