from sqlalchemy import BigInteger, Boolean, CheckConstraint, Column, DateTime, Index, Integer, String, func

from shared.core.database import Base
from ..enum.property_enum import CENTRAL_REVENUE_SERVICE_ID, AllocationMode, PropertyStatus

# sqlite only autoincrements INTEGER primary keys
IdType = BigInteger().with_variant(Integer, "sqlite")


class Property(Base):
    __tablename__ = "properties"

    id = Column(IdType, primary_key=True, autoincrement=True)
    owner_id = Column(BigInteger, nullable=False,
                      default=CENTRAL_REVENUE_SERVICE_ID)
    capacity = Column(Integer, nullable=False)
    for_sale = Column(Boolean, nullable=False, default=False)
    for_rent = Column(Boolean, nullable=False, default=False)

    # exclusive claim taken by an allocation request
    allocated = Column(Boolean, nullable=False, default=False)
    # which request holds the claim, a unit can be listed for both
    allocation_mode = Column(String(8), nullable=True)
    tenant_id = Column(BigInteger, nullable=True)

    created_at = Column(DateTime(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(),
                        onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("capacity BETWEEN 1 AND 8",
                        name="ck_properties_capacity"),
        Index("ix_properties_allocation", "capacity",
              "for_sale", "for_rent", "allocated"),
    )

    @property
    def status(self) -> PropertyStatus:
        if self.tenant_id is not None:
            return PropertyStatus.RENTED
        if self.allocated:
            if self.allocation_mode == AllocationMode.RENT.value:
                return PropertyStatus.PENDING_RENTAL
            return PropertyStatus.PENDING_TRANSFER
        if self.for_sale:
            return PropertyStatus.FOR_SALE
        if self.for_rent:
            return PropertyStatus.FOR_RENT
        return PropertyStatus.UNLISTED
