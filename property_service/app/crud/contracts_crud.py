# app/crud/contracts_crud.py
import logging
from decimal import Decimal

from sqlalchemy import or_
from sqlalchemy.orm import Session

from shared.helpers.pagination_helper import paginate
from ..models.contracts import RentalContract, SaleContract
from ..schemas.contracts_schemas import (
    RentalContractListResponse, RentalContractOut, RentalContractRequest,
    SaleContractListResponse, SaleContractOut, SaleContractRequest
)

logger = logging.getLogger(__name__)


def build_sale_contract_filters(params: SaleContractRequest):
    filters = []

    if params.id is not None:
        filters.append(SaleContract.id == params.id)

    if params.property_id is not None:
        filters.append(SaleContract.property_id == params.property_id)

    if params.owner_id is not None:
        filters.append(or_(SaleContract.seller_id == params.owner_id,
                           SaleContract.buyer_id == params.owner_id))

    if params.capacity is not None:
        filters.append(SaleContract.capacity == params.capacity)

    return filters


def build_rental_contract_filters(params: RentalContractRequest):
    filters = []

    if params.id is not None:
        filters.append(RentalContract.id == params.id)

    if params.property_id is not None:
        filters.append(RentalContract.property_id == params.property_id)

    if params.capacity is not None:
        filters.append(RentalContract.capacity == params.capacity)

    return filters


def get_sale_contracts(db: Session, params: SaleContractRequest) -> SaleContractListResponse:
    query = db.query(SaleContract).filter(*build_sale_contract_filters(params))
    contracts, total = paginate(
        query, SaleContract.id.asc(), params.page_number, params.page_size)

    return SaleContractListResponse(
        sale_contracts=[SaleContractOut.model_validate(c) for c in contracts],
        total=total,
    )


def get_rental_contracts(db: Session, params: RentalContractRequest) -> RentalContractListResponse:
    query = db.query(RentalContract).filter(
        *build_rental_contract_filters(params))
    contracts, total = paginate(
        query, RentalContract.id.asc(), params.page_number, params.page_size)

    return RentalContractListResponse(
        rental_contracts=[RentalContractOut.model_validate(c) for c in contracts],
        total=total,
    )


def create_sale_contract(db: Session, property_id: int, seller_id: int, buyer_id: int,
                         capacity: int, price: Decimal, commit: bool = True) -> SaleContract:
    db_contract = SaleContract(
        property_id=property_id,
        seller_id=seller_id,
        buyer_id=buyer_id,
        capacity=capacity,
        price=price,
    )
    db.add(db_contract)
    if commit:
        db.commit()
        db.refresh(db_contract)
        logger.info("Sale contract %s recorded for property %s",
                    db_contract.id, property_id)
    return db_contract


def create_rental_contract(db: Session, property_id: int, landlord_id: int, tenant_id: int,
                           capacity: int, price: Decimal, commit: bool = True) -> RentalContract:
    db_contract = RentalContract(
        property_id=property_id,
        landlord_id=landlord_id,
        tenant_id=tenant_id,
        capacity=capacity,
        price=price,
    )
    db.add(db_contract)
    if commit:
        db.commit()
        db.refresh(db_contract)
        logger.info("Rental contract %s recorded for property %s",
                    db_contract.id, property_id)
    return db_contract
