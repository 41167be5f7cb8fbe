"""Parse order-file records into OrderIntents.

A record is four ``;``-separated fields::

    <instrument_id>;<BUY|SELL|other>;<units>.<nano>;<quantity>

Lines that do not split into exactly four fields are reported with
``RecordErrorCode.FIELD_COUNT``; callers skip those without logging.
"""

import re
from dataclasses import dataclass
from enum import StrEnum

from orderfeed.models.order import OrderDirection, OrderIntent, Quotation

FIELD_SEPARATOR = ";"
PRICE_SEPARATOR = "."
FIELD_COUNT = 4

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Optional sign and ASCII digits only: int() alone would also accept
# surrounding whitespace, underscores and non-ASCII digits.
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

DIRECTIONS = {
    "BUY": OrderDirection.BUY,
    "SELL": OrderDirection.SELL,
}


class RecordErrorCode(StrEnum):
    FIELD_COUNT = "field_count"
    INSTRUMENT_ID_EMPTY = "instrument_id_empty"
    PRICE_UNITS = "price_units"
    PRICE_FRACTION = "price_fraction"
    QUANTITY = "quantity"


@dataclass(frozen=True)
class RecordError:
    code: RecordErrorCode
    field: str
    value: str
    message: str

    @property
    def silent(self) -> bool:
        return self.code == RecordErrorCode.FIELD_COUNT


@dataclass(frozen=True)
class ParsedRecord:
    intent: OrderIntent | None = None
    error: RecordError | None = None


def _parse_int64(s: str) -> int | None:
    """Parse a strict base-10 signed 64-bit integer, or None."""
    if _INTEGER_RE.fullmatch(s) is None:
        return None
    value = int(s)
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def parse_direction(token: str) -> OrderDirection:
    """Map a direction token; unknown tokens become UNSPECIFIED."""
    return DIRECTIONS.get(token, OrderDirection.UNSPECIFIED)


def parse_price(token: str) -> Quotation | RecordError:
    units_str, sep, nano_str = token.partition(PRICE_SEPARATOR)

    units = _parse_int64(units_str)
    if units is None:
        return RecordError(
            code=RecordErrorCode.PRICE_UNITS,
            field="price",
            value=token,
            message=f"price units {units_str!r} is not an integer",
        )

    nano = _parse_int64(nano_str) if sep else None
    if nano is None:
        return RecordError(
            code=RecordErrorCode.PRICE_FRACTION,
            field="price",
            value=token,
            message=(
                f"price fraction {nano_str!r} is not an integer"
                if sep else "price has no fractional part"
            ),
        )

    return Quotation(units=units, nano=nano)


def strip_line_ending(line: str) -> str:
    """Drop one trailing ``\\n`` and then one trailing ``\\r``.

    A ``\\r`` anywhere else stays part of the line.
    """
    line = line.removesuffix("\n")
    return line.removesuffix("\r")


def parse_record(line: str) -> ParsedRecord:
    """Parse one line of the order file.

    Never raises: problems are returned in ``ParsedRecord.error``.
    Quantity and nano are not range checked.
    """
    line = strip_line_ending(line)
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != FIELD_COUNT:
        return ParsedRecord(error=RecordError(
            code=RecordErrorCode.FIELD_COUNT,
            field="record",
            value=line,
            message=f"expected {FIELD_COUNT} fields, got {len(fields)}",
        ))

    instrument_id, direction_token, price_token, quantity_token = fields

    if not instrument_id:
        return ParsedRecord(error=RecordError(
            code=RecordErrorCode.INSTRUMENT_ID_EMPTY,
            field="instrument_id",
            value=instrument_id,
            message="instrument id is empty",
        ))

    price = parse_price(price_token)
    if isinstance(price, RecordError):
        return ParsedRecord(error=price)

    quantity = _parse_int64(quantity_token)
    if quantity is None:
        return ParsedRecord(error=RecordError(
            code=RecordErrorCode.QUANTITY,
            field="quantity",
            value=quantity_token,
            message=f"quantity {quantity_token!r} is not an integer",
        ))

    return ParsedRecord(intent=OrderIntent(
        instrument_id=instrument_id,
        direction=parse_direction(direction_token),
        price=price,
        quantity=quantity,
    ))
