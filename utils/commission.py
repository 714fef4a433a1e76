"""
Commission arithmetic.

Money is ``Decimal`` with two places, rounded half-up at the cent. Every
function here is pure: the same inputs always give the same output.
"""
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from numbers import Number
from typing import Annotated, Any, Iterable

from pydantic import PlainSerializer

from api.crud.errors import ValidationError

CENT = Decimal("0.01")
# largest value a Numeric(12, 2) money column holds
MAX_MONEY = Decimal("9999999999.99")

# Decimal inside, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 33.33 as 33.33 instead of its binary expansion
    return Decimal(str(value))


def round_money(value: Any) -> Decimal:
    """10.999 -> 11.00, 10.333 -> 10.33, 10.005 -> 10.01"""
    return _to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def has_max_two_decimals(value: Any) -> bool:
    try:
        d = _to_decimal(value)
    except (InvalidOperation, ValueError):
        return False
    if not d.is_finite():
        return False
    return (d * 100) == (d * 100).to_integral_value()


def format_currency(value: Any) -> str:
    return f"{round_money(value):.2f}"


def calculate_order_total(products: Iterable[Mapping[str, Any]]) -> Decimal:
    """
    SUM(qty * base_price) over all product lines.
    Raises ValidationError when the total does not fit a money column.
    """
    total = Decimal("0")
    for product in products:
        total += int(product["qty"]) * _to_decimal(product["base_price"])
    total = round_money(total)
    if total > MAX_MONEY:
        raise ValidationError(f"Order total exceeds the maximum of {MAX_MONEY}")
    return total


def calculate_commission(order_total: Any, rate: Any) -> Decimal:
    """
    order_total * rate / 100. ``rate`` must be the order's snapshot rate.
    """
    return round_money(_to_decimal(order_total) * _to_decimal(rate) / 100)


def _is_number(value: Any) -> bool:
    return isinstance(value, (Number, Decimal)) and not isinstance(value, bool)


def validate_products(products: Any) -> list[dict[str, Any]]:
    """
    Checks product lines and returns them normalized to name/qty/base_price.
    Raises ValidationError on the first invalid line.
    """
    if not isinstance(products, (list, tuple)):
        raise ValidationError("Products must be an array")
    if len(products) == 0:
        raise ValidationError("At least one product is required")

    validated: list[dict[str, Any]] = []
    for i, product in enumerate(products):
        if hasattr(product, "model_dump"):
            product = product.model_dump()
        if not isinstance(product, Mapping):
            raise ValidationError(f"Product at index {i} is invalid")

        name = product.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(f"Product at index {i}: name is required")

        qty = product.get("qty")
        if isinstance(qty, float) and qty.is_integer():
            qty = int(qty)
        if not isinstance(qty, int) or isinstance(qty, bool) or qty < 1:
            raise ValidationError(f"Product at index {i}: qty must be a positive integer")

        base_price = product.get("base_price")
        if not _is_number(base_price) or not has_max_two_decimals(base_price) or _to_decimal(base_price) < 0:
            raise ValidationError(
                f"Product at index {i}: base_price must be a non-negative number with at most 2 decimal places"
            )

        validated.append({
            "name": name,
            "qty": qty,
            # JSON column; two decimals survive the float round trip through str()
            "base_price": float(base_price) if not isinstance(base_price, int) else base_price,
        })

    return validated
