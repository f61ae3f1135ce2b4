from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def parse_money(value: str) -> Decimal:
    """Parse a statement amount such as ``$1,234.50``, ``-16.49`` or ``(12.00)``."""
    if value is None:
        raise ValueError("missing money value")

    normalized = value.strip()
    if not normalized:
        raise ValueError("empty money value")

    is_negative = normalized.startswith("(") and normalized.endswith(")")
    normalized = normalized.replace("$", "").replace(",", "")

    if is_negative:
        normalized = normalized[1:-1]

    try:
        amount = Decimal(normalized).quantize(
            CENTS,
            rounding=ROUND_HALF_UP
        )
    except InvalidOperation as exc:
        raise ValueError("invalid money value") from exc

    if not amount.is_finite():
        raise ValueError("invalid money value")

    return -amount if is_negative else amount


def round_money(value) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def sign_of(amount: Decimal) -> int:
    if amount > 0:
        return 1
    if amount < 0:
        return -1
    return 0
