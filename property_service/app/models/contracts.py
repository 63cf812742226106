# app/models/contracts.py
from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, Numeric, func

from shared.core.database import Base
from .properties import IdType


class SaleContract(Base):
    __tablename__ = "sale_contracts"

    id = Column(IdType, primary_key=True, autoincrement=True)
    property_id = Column(IdType, ForeignKey("properties.id"), nullable=False, index=True)
    seller_id = Column(BigInteger, nullable=False)
    buyer_id = Column(BigInteger, nullable=False)
    capacity = Column(Integer, nullable=False)
    price = Column(Numeric(14, 2), nullable=False)
    created_at = Column(DateTime(timezone=True),
                        server_default=func.now(), nullable=False)


class RentalContract(Base):
    __tablename__ = "rental_contracts"

    id = Column(IdType, primary_key=True, autoincrement=True)
    property_id = Column(IdType, ForeignKey("properties.id"), nullable=False, index=True)
    landlord_id = Column(BigInteger, nullable=False)
    tenant_id = Column(BigInteger, nullable=False)
    capacity = Column(Integer, nullable=False)
    price = Column(Numeric(14, 2), nullable=False)
    created_at = Column(DateTime(timezone=True),
                        server_default=func.now(), nullable=False)
