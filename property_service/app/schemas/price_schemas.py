from decimal import Decimal
from pydantic import BaseModel


class PriceOut(BaseModel):
    size: int
    unit_price: Decimal

    model_config = {"from_attributes": True}
