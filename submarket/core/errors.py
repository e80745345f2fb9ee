"""Error Hierarchy — typed, categorized exceptions for every marketplace failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (4xx) leave all records untouched: the shell rolls back the transition
    - Infrastructure errors (5xx) are critical
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with SubmarketError base: FastAPI global handler catches all
    - One class per rejection reason: callers and tests match on type or code,
      never on message text
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    ARITHMETIC = "arithmetic"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    identity: str | None = None
    address: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class SubmarketError(Exception):
    """Base exception for all marketplace errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "identity": self.context.identity,
                    "address": self.context.address,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Validation Errors (400) ────────────────────────────────────

class PlanValidationError(SubmarketError):
    """Plan terms out of range. Subclasses fix the code and message."""
    code = "VALIDATION_ERROR"
    default_message = "Invalid plan terms"

    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            self.default_message, self.code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidPriceError(PlanValidationError):
    code = "INVALID_PRICE"
    default_message = "Price must be greater than 0"


class PriceTooHighError(PlanValidationError):
    code = "PRICE_TOO_HIGH"
    default_message = "Price exceeds maximum allowed (1000 SOL)"


class InvalidDurationError(PlanValidationError):
    code = "INVALID_DURATION"
    default_message = "Duration must be at least 1 day"


class DurationTooLongError(PlanValidationError):
    code = "DURATION_TOO_LONG"
    default_message = "Duration exceeds maximum allowed (365 days)"


class EmptyPlanNameError(PlanValidationError):
    code = "EMPTY_PLAN_NAME"
    default_message = "Plan name cannot be empty"


class PlanNameTooLongError(PlanValidationError):
    code = "PLAN_NAME_TOO_LONG"
    default_message = "Plan name exceeds maximum length (200 characters)"


# ─── Authorization / Identity Errors (401, 403) ─────────────────

class CannotSubscribeToOwnPlanError(SubmarketError):
    """Subscriber is the plan's creator."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Cannot subscribe to your own plan",
            "CANNOT_SUBSCRIBE_TO_OWN_PLAN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 403,
        )


class CreatorMismatchError(SubmarketError):
    """Payee account is not the plan's creator."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Creator account mismatch",
            "CREATOR_MISMATCH", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 403,
        )


class MissingSignerError(SubmarketError):
    """State-changing request without a verified signer."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "A verified signer identity is required for this operation",
            "MISSING_SIGNER", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 401,
        )


# ─── Resource Errors (402) ──────────────────────────────────────

class InsufficientFundsToCreatePlanError(SubmarketError):
    """Creator cannot cover the plan record's minimum balance."""
    def __init__(
        self, balance: int, required: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            "Insufficient funds to create plan (need rent for account)",
            "INSUFFICIENT_FUNDS_TO_CREATE_PLAN", ErrorCategory.INSUFFICIENT_FUNDS,
            ErrorSeverity.ERROR, context, 402,
        )
        self.balance = balance
        self.required = required


class InsufficientFundsError(SubmarketError):
    """Subscriber cannot cover price + rent + fee buffer."""
    def __init__(
        self, balance: int, required: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            "Insufficient funds to subscribe (need price + rent)",
            "INSUFFICIENT_FUNDS", ErrorCategory.INSUFFICIENT_FUNDS,
            ErrorSeverity.ERROR, context, 402,
        )
        self.balance = balance
        self.required = required


class TransferFailedError(SubmarketError):
    """Value transfer primitive refused the movement."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Transfer failed: {message}",
            "TRANSFER_FAILED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 402,
        )


# ─── Arithmetic Errors (422) ────────────────────────────────────

class MathOverflowError(SubmarketError):
    """A checked arithmetic step left its integer range."""
    def __init__(self, operation: str = "", context: ErrorContext | None = None):
        super().__init__(
            "Mathematical operation overflow",
            "MATH_OVERFLOW", ErrorCategory.ARITHMETIC,
            ErrorSeverity.ERROR, context, 422,
        )
        self.operation = operation


# ─── Lifecycle Errors ───────────────────────────────────────────

class SubscriptionExpiredError(SubmarketError):
    """Gated access attempted on an expired subscription."""
    def __init__(self, expires_at: int, context: ErrorContext | None = None):
        super().__init__(
            "Subscription has expired",
            "SUBSCRIPTION_EXPIRED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 403,
        )
        self.expires_at = expires_at


class RecordAlreadyInitializedError(SubmarketError):
    """Deterministic address already holds a record."""
    def __init__(
        self, record_type: str, address: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.address = address
        super().__init__(
            f"{record_type} account {address} already in use",
            "ALREADY_INITIALIZED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.record_type = record_type
        self.address = address


class ResourceNotFoundError(SubmarketError):
    """Requested record does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class FaucetDisabledError(SubmarketError):
    """Airdrop requested on a ledger without a faucet."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Faucet is disabled on this ledger",
            "FAUCET_DISABLED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 403,
        )


class AirdropTooLargeError(SubmarketError):
    """Airdrop amount above the faucet cap."""
    def __init__(self, amount: int, cap: int, context: ErrorContext | None = None):
        super().__init__(
            f"Airdrop of {amount} lamports exceeds the faucet cap of {cap}",
            "AIRDROP_TOO_LARGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SubmarketError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
