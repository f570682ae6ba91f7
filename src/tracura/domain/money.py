"""
Tracura - Money/Quantity Parser

Parses free-text amounts (comma-grouped, currency-prefixed) into exact
Decimals and renders them back with Indian digit grouping (lakhs, crores):
from the right, the first group has 3 digits, every further group 2.
"""
from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_UP, localcontext

from .exceptions import ParseError

ZERO = Decimal("0")
CENT = Decimal("0.01")

# Fractional residue below this is not rendered ("5" rather than "5.00")
FRACTION_EPSILON = Decimal("0.0001")

# Largest accepted quantity or unit price (exclusive): totals stay exact to the cent
MAX_AMOUNT = Decimal("1000000000000")

# Largest accepted stored total (department amount, budget)
MAX_TOTAL = MAX_AMOUNT * MAX_AMOUNT

# Wide enough for any sum of in-range totals
_MONEY_CONTEXT = Context(prec=60, rounding=ROUND_HALF_UP)

CURRENCY_SYMBOLS = ("₹", "$", "€", "£")

_STRIP_CHARS = (",", " ", "\u00a0", "\u202f", "\t")


def _clean(raw: str) -> str:
    """Remove grouping separators, whitespace and a leading currency symbol."""
    cleaned = raw.strip()
    for symbol in CURRENCY_SYMBOLS:
        if cleaned.startswith(symbol):
            cleaned = cleaned[len(symbol):]
            break
        if cleaned.startswith("-" + symbol):
            cleaned = "-" + cleaned[len(symbol) + 1:]
            break
    for ch in _STRIP_CHARS:
        cleaned = cleaned.replace(ch, "")
    return cleaned


def parse_amount(raw: str | int | float | Decimal | None, limit: Decimal = MAX_AMOUNT) -> Decimal:
    """
    Parse user/stored input into an exact Decimal.

    Args:
        raw: Display text such as "12,34,567.50" or "₹1,000", or a number
        limit: Exclusive magnitude bound (MAX_TOTAL for stored totals)

    Returns:
        Parsed Decimal (empty input parses to zero)

    Raises:
        ParseError: If the cleaned text is non-empty and not a plain finite
            decimal (exponent notation is rejected), or its magnitude reaches
            the limit
    """
    if raw is None:
        return ZERO
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float)):
        value = Decimal(str(raw))
    else:
        cleaned = _clean(raw)
        if not cleaned:
            return ZERO
        if "e" in cleaned.lower():
            raise ParseError(f"Invalid amount: '{raw}'", raw=raw)
        try:
            value = Decimal(cleaned)
        except InvalidOperation:
            raise ParseError(f"Invalid amount: '{raw}'", raw=raw)

    if not value.is_finite():
        raise ParseError(f"Amount must be a finite number: '{raw}'", raw=str(raw))
    if abs(value) >= limit:
        raise ParseError(f"Amount is too large: '{raw}'", raw=str(raw))
    return value


def quantize_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places (half-up)."""
    return value.quantize(CENT, context=_MONEY_CONTEXT)


def money_product(quantity: Decimal, unit_price: Decimal) -> Decimal:
    """quantity x unit price, rounded to 2 places."""
    return quantize_money(_MONEY_CONTEXT.multiply(quantity, unit_price))


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_grouped(value: Decimal | int | float) -> str:
    """
    Render a value with Indian digit grouping.

    Examples:
        1234567 -> "12,34,567"
        Decimal("350") -> "350"
        Decimal("350.00") -> "350.00"
        1000.5 -> "1,000.50"

    A fraction is rendered (always 2 digits) when it exceeds 0.0001, or when
    the value is a Decimal already carrying 2-place money precision, such as
    line-item totals and department amounts.

    Args:
        value: Amount to render

    Returns:
        Grouped string
    """
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    keeps_cents = isinstance(value, Decimal) and value.as_tuple().exponent == -2
    rounded = quantize_money(abs(amount))
    with localcontext(_MONEY_CONTEXT):
        integer_part, fraction = divmod(rounded, 1)
    show_fraction = fraction > FRACTION_EPSILON or keeps_cents

    result = _group_indian(str(int(integer_part)))
    if show_fraction:
        result += "." + f"{fraction:.2f}".split(".")[1]
    if amount < 0 and (integer_part or fraction > FRACTION_EPSILON):
        result = "-" + result
    return result


def format_amount_input(raw: str) -> str:
    """
    Re-format text as the user types.

    Empty input stays empty; text that is not a number is returned cleaned
    but otherwise unchanged so the field can be re-prompted.
    """
    cleaned = _clean(raw)
    if not cleaned:
        return ""
    try:
        return format_grouped(parse_amount(cleaned))
    except ParseError:
        return cleaned


def is_zero_amount_text(raw: str | None) -> bool:
    """True for empty, "0" and zero-currency strings such as "₹0.00"."""
    if raw is None or not raw.strip():
        return True
    try:
        return parse_amount(raw, MAX_TOTAL) == ZERO
    except ParseError:
        return False


def to_decimal_string(value: Decimal) -> str:
    """Serialize an amount as a plain 2-place decimal string ("1234.50")."""
    return f"{quantize_money(value):f}"
