from enum import Enum


class PropertyStatus(str, Enum):
    UNLISTED = "unlisted"
    FOR_SALE = "for_sale"
    PENDING_TRANSFER = "pending_transfer"
    FOR_RENT = "for_rent"
    PENDING_RENTAL = "pending_rental"
    RENTED = "rented"


# owner id of every unit still held by the central revenue service
CENTRAL_REVENUE_SERVICE_ID = -1

MIN_CAPACITY = 1
MAX_CAPACITY = 8
PROPERTY_SIZES = range(MIN_CAPACITY, MAX_CAPACITY + 1)


class AllocationMode(str, Enum):
    SALE = "sale"
    RENT = "rent"
