from sqlalchemy.orm import Query

from shared.core.exceptions import ValidationError


def validate_page(page_number: int, page_size: int):
    if page_number is None or page_number < 1:
        raise ValidationError("Page number must be 1 or greater")
    if page_size is None or page_size <= 0:
        raise ValidationError("Page size must be greater than 0")


def paginate(query: Query, order_by, page_number: int, page_size: int):
    """Return one 1-indexed page of ``query`` plus the unpaged total.

    ``order_by`` must be a unique column so that consecutive pages never
    overlap or skip rows.
    """
    validate_page(page_number, page_size)

    total = query.order_by(None).count()
    items = (
        query
        .order_by(order_by)
        .offset((page_number - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return items, total
