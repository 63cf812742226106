import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.exceptions import ConflictError, ValidationError
from ..crud import contracts_crud, prices_crud, properties_crud
from ..enum.property_enum import PROPERTY_SIZES
from ..schemas.contracts_schemas import (
    RentalContractListResponse, RentalContractOut, RentalContractRequest,
    SaleContractListResponse, SaleContractOut, SaleContractRequest
)
from ..schemas.price_schemas import PriceOut
from ..schemas.properties_schemas import (
    PropertyAllocation, PropertyListResponse, PropertyOut, PropertyRequest
)

logger = logging.getLogger(__name__)


class PropertyManagerService:
    """Prices, allocates, lists and transfers properties.

    One instance is built per request around that request's session. All
    price, property and contract state lives in the database, so nothing
    is shared between instances except through committed rows.
    """

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    def set_price(self, new_price, size: Optional[int] = None) -> List[PriceOut]:
        entries = prices_crud.set_price(self.db, new_price, size)
        return [PriceOut.model_validate(e) for e in entries]

    def get_price(self, size: int) -> Decimal:
        return prices_crud.get_price(self.db, size)

    def list_prices(self) -> List[PriceOut]:
        return [PriceOut.model_validate(e) for e in prices_crud.get_prices(self.db)]

    # ------------------------------------------------------------------
    # Allocation and ownership
    # ------------------------------------------------------------------

    def get_property(self, size: int, to_rent: bool) -> PropertyAllocation:
        """Price and claim the lowest-id available unit of ``size``.

        ``property_id`` is -1 when nothing matches; that is a normal
        answer, not an error.
        """
        if size not in PROPERTY_SIZES:
            raise ValidationError("Invalid Size")

        price = self.get_price(size)
        property_id = properties_crud.find_available(self.db, size, to_rent)
        return PropertyAllocation(price=price, property_id=property_id)

    def get_property_owner(self, property_id: int) -> int:
        return properties_crud.get_owner(self.db, property_id)

    def list_for_sale(self, property_id: int) -> PropertyOut:
        return PropertyOut.model_validate(properties_crud.list_for_sale(self.db, property_id))

    def list_for_rent(self, property_id: int) -> PropertyOut:
        return PropertyOut.model_validate(properties_crud.list_for_rent(self.db, property_id))

    def spawn_properties(self, capacities: List[int]) -> List[PropertyOut]:
        return [PropertyOut.model_validate(p)
                for p in properties_crud.spawn_properties(self.db, capacities)]

    # ------------------------------------------------------------------
    # Transfers and rentals
    # ------------------------------------------------------------------

    def approve_transfer(self, property_id: int, seller_id: int, buyer_id: int,
                         price, approval: bool) -> Optional[SaleContractOut]:
        """Complete or cancel the sale of ``property_id``.

        Approval moves ownership to the buyer, takes the unit off the market
        and records a sale contract in one commit. Cancelling leaves owner
        and contracts alone and only drops the allocation claim.
        """
        price = prices_crud.parse_price(price, prices_crud.CONTRACT_PRICE_DIGITS)
        db_property = properties_crud.get_existing_property(self.db, property_id)

        if db_property.owner_id != seller_id:
            raise ConflictError(
                f"Property {property_id} is not owned by seller {seller_id}")

        if not approval:
            self._release(db_property)
            logger.info("Transfer of property %s cancelled", property_id)
            return None

        if buyer_id == seller_id:
            raise ValidationError("Buyer and seller must be different")

        try:
            db_property.owner_id = buyer_id
            db_property.for_sale = False
            db_property.for_rent = False
            db_property.allocated = False
            db_property.allocation_mode = None
            contract = contracts_crud.create_sale_contract(
                self.db, property_id, seller_id, buyer_id,
                db_property.capacity, price, commit=False)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(contract)
        logger.info("Property %s transferred from %s to %s for %s (contract %s)",
                    property_id, seller_id, buyer_id, price, contract.id)
        return SaleContractOut.model_validate(contract)

    def approve_rental(self, property_id: int, landlord_id: int, tenant_id: int,
                       price, approval: bool) -> Optional[RentalContractOut]:
        price = prices_crud.parse_price(price, prices_crud.CONTRACT_PRICE_DIGITS)
        db_property = properties_crud.get_existing_property(self.db, property_id)

        if db_property.owner_id != landlord_id:
            raise ConflictError(
                f"Property {property_id} is not owned by landlord {landlord_id}")
        if db_property.tenant_id is not None:
            raise ConflictError(f"Property {property_id} is already rented")

        if not approval:
            self._release(db_property)
            logger.info("Rental of property %s cancelled", property_id)
            return None

        if tenant_id == landlord_id:
            raise ValidationError("Tenant and landlord must be different")

        try:
            db_property.tenant_id = tenant_id
            db_property.for_rent = False
            db_property.allocated = False
            db_property.allocation_mode = None
            contract = contracts_crud.create_rental_contract(
                self.db, property_id, landlord_id, tenant_id,
                db_property.capacity, price, commit=False)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(contract)
        logger.info("Property %s rented by %s for %s (contract %s)",
                    property_id, tenant_id, price, contract.id)
        return RentalContractOut.model_validate(contract)

    def end_rental(self, property_id: int) -> PropertyOut:
        db_property = properties_crud.get_existing_property(self.db, property_id)
        if db_property.tenant_id is None:
            raise ConflictError(f"Property {property_id} is not rented")

        db_property.tenant_id = None
        self.db.commit()
        self.db.refresh(db_property)
        logger.info("Rental of property %s ended", property_id)
        return PropertyOut.model_validate(db_property)

    def _release(self, db_property):
        if db_property.allocated:
            properties_crud.release_property(self.db, db_property)
            self.db.commit()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_properties(self, params: PropertyRequest) -> PropertyListResponse:
        return properties_crud.get_properties(self.db, params)

    def get_sale_contracts(self, params: SaleContractRequest) -> SaleContractListResponse:
        return contracts_crud.get_sale_contracts(self.db, params)

    def get_rental_contracts(self, params: RentalContractRequest) -> RentalContractListResponse:
        return contracts_crud.get_rental_contracts(self.db, params)
