"""Account Schemas — balances, faucet and rent quotes."""

from pydantic import BaseModel, Field

from submarket.core.domain_types import U64_MAX


class AccountResponse(BaseModel):
    identity: str
    balance: int


class AirdropRequest(BaseModel):
    amount: int = Field(gt=0, le=U64_MAX)


class RentQuoteResponse(BaseModel):
    """Minimum balances and the fee buffer a subscriber must hold on top of price."""
    plan_record_space: int
    plan_rent: int
    subscription_record_space: int
    subscription_rent: int
    transaction_fee_buffer: int
