from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_db
from shared.core.exceptions import UnavailableError
from shared.core.schemas import JsonOutResult
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..crud.properties_crud import NO_PROPERTY
from ..schemas.contracts_schemas import (
    RentalContractListResponse, RentalContractRequest, SaleContractListResponse, SaleContractRequest
)
from ..schemas.properties_schemas import (
    PropertyListResponse, PropertyRequest, RentalApproval, RequestProperty, SpawnRequest, TransferApproval
)
from ..services.property_manager_service import PropertyManagerService

router = APIRouter(prefix="/api/property-manager", tags=["property-manager"])


def get_service(db: Session = Depends(get_db)) -> PropertyManagerService:
    return PropertyManagerService(db)

# -----------------------------------------------------------------


@router.get("/ping")
def ping():
    return "pong"


@router.put("/price/{new_price}", dependencies=[Depends(allow_admin)])
def set_price(
        new_price: str,
        size: Optional[int] = Query(None),
        service: PropertyManagerService = Depends(get_service)):
    prices = service.set_price(new_price, size)
    return success_response(
        data=prices,
        message="The new price per unit was set",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL)


@router.get("/prices", dependencies=[Depends(validate_current_token)])
def list_prices(service: PropertyManagerService = Depends(get_service)):
    return success_response(data=service.list_prices())


@router.put("/property", dependencies=[Depends(validate_current_token)])
def request_property(
        request: RequestProperty,
        service: PropertyManagerService = Depends(get_service)):
    allocation = service.get_property(request.size, request.to_rent)
    if allocation.property_id == NO_PROPERTY:
        raise UnavailableError("No Property Is Available")
    return success_response(data=allocation)


@router.get("/owner/{property_id}", dependencies=[Depends(validate_current_token)])
def get_owner(property_id: int, service: PropertyManagerService = Depends(get_service)):
    return success_response(data=service.get_property_owner(property_id))


@router.post("/sell", dependencies=[Depends(validate_current_token)])
def sell_property(id: int, service: PropertyManagerService = Depends(get_service)):
    service.list_for_sale(id)
    return success_response(
        data=None,
        message=f"Property {id} has been listed for sale",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL)


@router.post("/rent", dependencies=[Depends(validate_current_token)])
def rent_property(id: int, service: PropertyManagerService = Depends(get_service)):
    service.list_for_rent(id)
    return success_response(
        data=None,
        message=f"Property {id} has been listed for rent",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL)


@router.put("/approval", dependencies=[Depends(validate_current_token)])
def approve_property(
        request: TransferApproval,
        service: PropertyManagerService = Depends(get_service)):
    contract = service.approve_transfer(
        request.property_id, request.seller_id, request.buyer_id,
        request.price, request.approval)
    message = (f"Property {request.property_id} has been transferred"
               if request.approval else
               f"Transfer of property {request.property_id} has been cancelled")
    return success_response(
        data=contract, message=message,
        status_code=AppStatusCode.OPERATION_SUCCESSFUL)


@router.put("/rental-approval", dependencies=[Depends(validate_current_token)])
def approve_rental(
        request: RentalApproval,
        service: PropertyManagerService = Depends(get_service)):
    contract = service.approve_rental(
        request.property_id, request.landlord_id, request.tenant_id,
        request.price, request.approval)
    message = (f"Property {request.property_id} has been rented"
               if request.approval else
               f"Rental of property {request.property_id} has been cancelled")
    return success_response(
        data=contract, message=message,
        status_code=AppStatusCode.OPERATION_SUCCESSFUL)


@router.put("/end-rental/{property_id}", dependencies=[Depends(validate_current_token)])
def end_rental(property_id: int, service: PropertyManagerService = Depends(get_service)):
    return success_response(
        data=service.end_rental(property_id),
        message=f"Rental of property {property_id} has ended",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL)


@router.post("/spawn", dependencies=[Depends(allow_admin)])
def spawn_properties(
        request: SpawnRequest,
        service: PropertyManagerService = Depends(get_service)):
    return success_response(
        data=service.spawn_properties(request.capacities),
        message=f"{len(request.capacities)} properties spawned",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL)


@router.get("/properties", response_model=JsonOutResult[PropertyListResponse],
            dependencies=[Depends(validate_current_token)])
def get_properties(
        params: PropertyRequest = Depends(),
        service: PropertyManagerService = Depends(get_service)):
    return success_response(data=service.get_properties(params))


@router.get("/sale-contracts", response_model=JsonOutResult[SaleContractListResponse],
            dependencies=[Depends(validate_current_token)])
def get_sale_contracts(
        params: SaleContractRequest = Depends(),
        service: PropertyManagerService = Depends(get_service)):
    return success_response(data=service.get_sale_contracts(params))


@router.get("/rental-contracts", response_model=JsonOutResult[RentalContractListResponse],
            dependencies=[Depends(validate_current_token)])
def get_rental_contracts(
        params: RentalContractRequest = Depends(),
        service: PropertyManagerService = Depends(get_service)):
    return success_response(data=service.get_rental_contracts(params))
