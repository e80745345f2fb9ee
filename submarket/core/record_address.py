"""Record Addressing — deterministic addresses derived from namespace tag + key fields.

Invariants:
    - Same (namespace, seeds) always yields the same address; nothing else does
    - Plan address = H("plan", creator, plan_id as u64 little-endian)
    - Subscription address = H("subscription", subscriber, creator, plan_id as u64 LE)
    - Every seed is length-prefixed, so ("ab", "c") and ("a", "bc") never collide
    - Address is 64 lowercase hex chars (SHA-256)

Design Decisions:
    - Content-derived key in place of pointers: the address doubles as the row's
      primary key, which gives insert-if-absent uniqueness for free
    - Namespace tag is the first seed: plan and subscription keyspaces are disjoint
"""

import hashlib

from submarket.core.domain_types import (
    Identity, PlanId, RecordAddress, RecordNamespace, U64_MAX,
)
from submarket.core.errors import MathOverflowError


def encode_plan_id(plan_id: int) -> bytes:
    """Plan ids are u64 seeds, little-endian, fixed 8 bytes."""
    if plan_id < 0 or plan_id > U64_MAX:
        raise MathOverflowError("encode_plan_id")
    return plan_id.to_bytes(8, "little")


def derive_address(namespace: RecordNamespace, *seeds: bytes) -> RecordAddress:
    """Hash the namespace tag and length-prefixed seeds into a record address."""
    digest = hashlib.sha256()
    for seed in (namespace.value.encode("utf-8"), *seeds):
        digest.update(len(seed).to_bytes(2, "little"))
        digest.update(seed)
    return RecordAddress(digest.hexdigest())


def derive_plan_address(creator: Identity, plan_id: PlanId) -> RecordAddress:
    return derive_address(
        RecordNamespace.PLAN,
        creator.encode("utf-8"),
        encode_plan_id(plan_id),
    )


def derive_subscription_address(
    subscriber: Identity, creator: Identity, plan_id: PlanId,
) -> RecordAddress:
    return derive_address(
        RecordNamespace.SUBSCRIPTION,
        subscriber.encode("utf-8"),
        creator.encode("utf-8"),
        encode_plan_id(plan_id),
    )
