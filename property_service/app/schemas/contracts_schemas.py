# app/schemas/contracts_schemas.py
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel
from typing import List, Optional

from shared.core.schemas import PageQueryParams


class SaleContractOut(BaseModel):
    id: int
    property_id: int
    seller_id: int
    buyer_id: int
    capacity: int
    price: Decimal
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RentalContractOut(BaseModel):
    id: int
    property_id: int
    landlord_id: int
    tenant_id: int
    capacity: int
    price: Decimal
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SaleContractRequest(PageQueryParams):
    id: Optional[int] = None
    property_id: Optional[int] = None
    owner_id: Optional[int] = None
    capacity: Optional[int] = None


class RentalContractRequest(PageQueryParams):
    id: Optional[int] = None
    property_id: Optional[int] = None
    capacity: Optional[int] = None


class SaleContractListResponse(BaseModel):
    sale_contracts: List[SaleContractOut]
    total: int


class RentalContractListResponse(BaseModel):
    rental_contracts: List[RentalContractOut]
    total: int
