from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional

from shared.core.schemas import PageQueryParams
from ..enum.property_enum import PropertyStatus


class PropertyOut(BaseModel):
    id: int
    owner_id: int
    capacity: int
    for_sale: bool
    for_rent: bool
    allocated: bool
    allocation_mode: Optional[str] = None
    tenant_id: Optional[int] = None
    status: PropertyStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PropertyRequest(PageQueryParams):
    id: Optional[int] = None
    owner_id: Optional[int] = None
    capacity: Optional[int] = None


class PropertyListResponse(BaseModel):
    properties: List[PropertyOut]
    total: int

    model_config = {"from_attributes": True}


class RequestProperty(BaseModel):
    size: int
    to_rent: bool = False


class PropertyAllocation(BaseModel):
    price: Decimal
    property_id: int


class SpawnRequest(BaseModel):
    capacities: List[int] = Field(min_length=1)


class TransferApproval(BaseModel):
    property_id: int
    seller_id: int
    buyer_id: int
    price: Decimal
    approval: bool


class RentalApproval(BaseModel):
    property_id: int
    landlord_id: int
    tenant_id: int
    price: Decimal
    approval: bool
