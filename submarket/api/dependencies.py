"""API Dependencies — signer capability, clock and rent schedule for route handlers.

Invariants:
    - get_signer is the ONLY producer of VerifiedIdentity; services never read
      request headers or any ambient "current signer"
    - get_clock returns one process-wide SystemClock (tests override it)

Design Decisions:
    - The signer header is the hand-off point from the external authorization
      collaborator (gateway / wallet adapter) that verified the signature
"""

import re

from fastapi import Depends, Header

from submarket.config import Settings, get_settings
from submarket.core.domain_types import VerifiedIdentity
from submarket.core.errors import ErrorContext, MissingSignerError
from submarket.core.rent import RentSchedule
from submarket.core.repository_protocols import Clock
from submarket.infrastructure.clock import SystemClock
from submarket.schemas.common import IDENTITY_PATTERN

SIGNER_HEADER = "X-Signer-Identity"

_identity_re = re.compile(IDENTITY_PATTERN)
_system_clock = SystemClock()


def get_signer(
    x_signer_identity: str | None = Header(None, alias=SIGNER_HEADER),
) -> VerifiedIdentity:
    if not x_signer_identity or not _identity_re.match(x_signer_identity):
        raise MissingSignerError(ErrorContext(identity=x_signer_identity))
    return VerifiedIdentity(x_signer_identity)


def get_clock() -> Clock:
    return _system_clock


def get_rent_schedule(settings: Settings = Depends(get_settings)) -> RentSchedule:
    return settings.rent_schedule()
