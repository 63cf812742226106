from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, func

from shared.core.database import Base


class PropertyPrice(Base):
    __tablename__ = "property_prices"

    size = Column(Integer, primary_key=True, autoincrement=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(),
                        onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("size BETWEEN 1 AND 8", name="ck_property_prices_size"),
    )
