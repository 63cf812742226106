import logging
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.exceptions import ConflictError, NotFoundError, ValidationError
from shared.helpers.pagination_helper import paginate
from ..enum.property_enum import CENTRAL_REVENUE_SERVICE_ID, PROPERTY_SIZES, AllocationMode
from ..models.properties import Property
from ..schemas.properties_schemas import PropertyListResponse, PropertyOut, PropertyRequest

logger = logging.getLogger(__name__)

NO_PROPERTY = -1

# ----------------------------------------------------------------------
# QUERIES
# ----------------------------------------------------------------------


def build_property_filters(params: PropertyRequest):
    filters = []

    if params.id is not None:
        filters.append(Property.id == params.id)

    if params.owner_id is not None:
        filters.append(Property.owner_id == params.owner_id)

    if params.capacity is not None:
        filters.append(Property.capacity == params.capacity)

    return filters


def get_properties(db: Session, params: PropertyRequest) -> PropertyListResponse:
    query = db.query(Property).filter(*build_property_filters(params))
    properties, total = paginate(
        query, Property.id.asc(), params.page_number, params.page_size)

    return PropertyListResponse(
        properties=[PropertyOut.model_validate(p) for p in properties],
        total=total,
    )


def get_property_by_id(db: Session, property_id: int) -> Optional[Property]:
    return db.query(Property).filter(Property.id == property_id).first()


def get_existing_property(db: Session, property_id: int) -> Property:
    db_property = get_property_by_id(db, property_id)
    if not db_property:
        raise NotFoundError(f"Property {property_id} does not exist")
    return db_property


def get_owner(db: Session, property_id: int) -> int:
    return get_existing_property(db, property_id).owner_id

# ----------------------------------------------------------------------
# LISTING
# ----------------------------------------------------------------------


def list_for_sale(db: Session, property_id: int) -> Property:
    db_property = get_existing_property(db, property_id)
    if not db_property.for_sale:
        db_property.for_sale = True
        db.commit()
        db.refresh(db_property)
        logger.info("Property %s listed for sale", property_id)
    return db_property


def list_for_rent(db: Session, property_id: int) -> Property:
    db_property = get_existing_property(db, property_id)
    if not db_property.for_rent:
        db_property.for_rent = True
        db.commit()
        db.refresh(db_property)
        logger.info("Property %s listed for rent", property_id)
    return db_property

# ----------------------------------------------------------------------
# ALLOCATION
# ----------------------------------------------------------------------


def _availability_filters(size: int, to_rent: bool):
    filters = [Property.capacity == size, Property.allocated == False]
    if to_rent:
        filters += [Property.for_rent == True, Property.tenant_id == None]
    else:
        filters.append(Property.for_sale == True)
    return filters


def next_candidate(db: Session, size: int, to_rent: bool) -> Optional[int]:
    return (
        db.query(Property.id)
        .filter(*_availability_filters(size, to_rent))
        .order_by(Property.id.asc())
        .limit(1)
        .scalar()
    )


def claim_property(db: Session, property_id: int, size: int, to_rent: bool) -> bool:
    """Mark ``property_id`` as allocated if it is still available.

    The availability check and the write are one conditional UPDATE, so
    only one of several concurrent callers can see a row count of 1.
    """
    result = db.execute(
        update(Property)
        .where(Property.id == property_id, *_availability_filters(size, to_rent))
        .values(allocated=True,
                allocation_mode=(AllocationMode.RENT if to_rent else AllocationMode.SALE).value)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount == 1


def find_available(db: Session, size: int, to_rent: bool, max_retries: Optional[int] = None) -> int:
    attempts = settings.ALLOCATION_MAX_RETRIES if max_retries is None else max_retries

    for attempt in range(1, attempts + 1):
        candidate = next_candidate(db, size, to_rent)
        if candidate is None:
            return NO_PROPERTY

        if claim_property(db, candidate, size, to_rent):
            logger.info("Allocated property %s (size=%s, to_rent=%s)",
                        candidate, size, to_rent)
            return candidate

        logger.warning("Lost allocation race for property %s (attempt %s/%s)",
                       candidate, attempt, attempts)

    raise ConflictError(
        f"Could not allocate a property of size {size} after {attempts} attempts")


def release_property(db: Session, db_property: Property):
    db_property.allocated = False
    db_property.allocation_mode = None

# ----------------------------------------------------------------------
# SPAWN
# ----------------------------------------------------------------------


def spawn_properties(db: Session, capacities: List[int]) -> List[Property]:
    invalid = [c for c in capacities if c not in PROPERTY_SIZES]
    if invalid:
        raise ValidationError(f"Invalid capacity {invalid[0]}")

    properties = [
        Property(owner_id=CENTRAL_REVENUE_SERVICE_ID, capacity=capacity,
                 for_sale=False, for_rent=False, allocated=False)
        for capacity in capacities
    ]
    db.add_all(properties)
    db.commit()
    for db_property in properties:
        db.refresh(db_property)

    logger.info("Spawned %s properties", len(properties))
    return properties
