import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from sqlalchemy.orm import Session

from shared.core.exceptions import NotFoundError, ValidationError
from ..enum.property_enum import MAX_CAPACITY, MIN_CAPACITY, PROPERTY_SIZES
from ..models.prices import PropertyPrice

logger = logging.getLogger(__name__)

PRICE_QUANTUM = Decimal("0.01")

# integer digits left by Numeric(12, 2) prices and Numeric(14, 2) contract prices
UNIT_PRICE_DIGITS = 10
CONTRACT_PRICE_DIGITS = 12


def parse_price(raw, max_integer_digits: int = UNIT_PRICE_DIGITS) -> Decimal:
    """Parse a unit price; anything negative, non-finite or malformed is rejected."""
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid price '{raw}'")
    try:
        price = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid price '{raw}'")

    if not price.is_finite() or price < 0:
        raise ValidationError(f"Invalid price '{raw}'")
    if price.as_tuple().exponent < -2:
        raise ValidationError(
            f"Invalid price '{raw}': at most two decimal places are allowed")
    if price >= Decimal(10) ** max_integer_digits:
        raise ValidationError(
            f"Invalid price '{raw}': at most {max_integer_digits} integer digits are allowed")
    try:
        return price.quantize(PRICE_QUANTUM)
    except InvalidOperation:
        raise ValidationError(f"Invalid price '{raw}'")


def set_price(db: Session, new_price, size: Optional[int] = None) -> List[PropertyPrice]:
    price = parse_price(new_price)
    if size is not None and size not in PROPERTY_SIZES:
        raise ValidationError("Invalid Size")

    sizes = [size] if size is not None else list(PROPERTY_SIZES)
    existing = {
        entry.size: entry
        for entry in db.query(PropertyPrice).filter(PropertyPrice.size.in_(sizes)).all()
    }

    entries = []
    for s in sizes:
        entry = existing.get(s)
        if entry is None:
            entry = PropertyPrice(size=s, unit_price=price)
            db.add(entry)
        else:
            entry.unit_price = price
        entries.append(entry)

    db.commit()
    for entry in entries:
        db.refresh(entry)

    logger.info("Unit price set to %s for sizes %s", price, sizes)
    return entries


def get_price(db: Session, size: int) -> Decimal:
    if size is None or not MIN_CAPACITY <= size <= MAX_CAPACITY:
        raise NotFoundError(f"No price for size {size}")

    entry = db.query(PropertyPrice).filter(PropertyPrice.size == size).first()
    if not entry:
        raise NotFoundError(f"No price has been set for size {size}")
    return Decimal(entry.unit_price).quantize(PRICE_QUANTUM)


def get_prices(db: Session) -> List[PropertyPrice]:
    return db.query(PropertyPrice).order_by(PropertyPrice.size.asc()).all()
