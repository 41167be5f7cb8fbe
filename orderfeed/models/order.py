"""Order models: parsed intents, wire requests, and submission results."""

from dataclasses import dataclass
from enum import StrEnum


class OrderDirection(StrEnum):
    UNSPECIFIED = "ORDER_DIRECTION_UNSPECIFIED"
    BUY = "ORDER_DIRECTION_BUY"
    SELL = "ORDER_DIRECTION_SELL"


class OrderType(StrEnum):
    LIMIT = "ORDER_TYPE_LIMIT"
    MARKET = "ORDER_TYPE_MARKET"
    BESTPRICE = "ORDER_TYPE_BESTPRICE"


@dataclass(frozen=True)
class Quotation:
    """Price as whole units plus a nano fraction."""

    units: int
    nano: int

    def to_payload(self) -> dict:
        # int64 fields travel as strings in the gateway's JSON mapping
        return {"units": str(self.units), "nano": self.nano}

    def __str__(self) -> str:
        # protobuf text form: zero-valued fields are left out
        parts = []
        if self.units:
            parts.append(f"units:{self.units}")
        if self.nano:
            parts.append(f"nano:{self.nano}")
        return " ".join(parts)


@dataclass(frozen=True)
class OrderIntent:
    instrument_id: str
    direction: OrderDirection
    price: Quotation
    quantity: int


@dataclass(frozen=True)
class PostOrderRequest:
    instrument_id: str
    quantity: int
    price: Quotation
    direction: OrderDirection
    account_id: str
    order_type: OrderType
    order_id: str

    def to_payload(self) -> dict:
        return {
            "instrumentId": self.instrument_id,
            "quantity": str(self.quantity),
            "price": self.price.to_payload(),
            "direction": self.direction.value,
            "accountId": self.account_id,
            "orderType": self.order_type.value,
            "orderId": self.order_id,
        }


@dataclass(frozen=True)
class SubmissionResult:
    instrument_id: str
    order_id: str
    status: str | None  # execution report status, verbatim from the API
    error_message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is not None
