"""Pickup point, reception and product endpoints."""

from datetime import datetime
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, Query, Response, status

from pvz_store.api.schemas import (
    CreateProductRequest,
    CreatePvzRequest,
    CreateReceptionRequest,
    ErrorResponse,
    ProductResponse,
    PvzDetailResponse,
    PvzResponse,
    ReceptionResponse,
)
from pvz_store.api.security import (
    get_container,
    require_any_role,
    require_employee,
    require_moderator,
)
from pvz_store.containers import AppContainer

router = APIRouter(tags=["pvz"])

_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
}


@router.post(
    "/pvz",
    status_code=status.HTTP_201_CREATED,
    response_model=PvzResponse,
    responses=_ERRORS,
    dependencies=[Depends(require_moderator)],
)
def create_pvz(
    body: CreatePvzRequest,
    container: AppContainer = Depends(get_container),
) -> PvzResponse:
    """Register a pickup point (moderators only)."""
    point = container.pvz_service.create_pickup_point(
        pvz_id=body.id or uuid4(),
        city=body.city,
        registration_date=body.registration_date
        or container.pvz_service.clock(),
    )
    return PvzResponse.from_domain(point)


@router.get(
    "/pvz",
    response_model=list[PvzDetailResponse],
    responses=_ERRORS,
    dependencies=[Depends(require_any_role)],
)
def list_pvz(
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    container: AppContainer = Depends(get_container),
) -> list[PvzDetailResponse]:
    """List pickup points with receptions filtered by creation date."""
    details = container.pvz_service.list_pickup_points_with_detail(
        page=page, limit=limit, start_date=start_date, end_date=end_date
    )
    return [PvzDetailResponse.from_domain(detail) for detail in details]


@router.post(
    "/receptions",
    status_code=status.HTTP_201_CREATED,
    response_model=ReceptionResponse,
    responses=_ERRORS,
    dependencies=[Depends(require_employee)],
)
def create_reception(
    body: CreateReceptionRequest,
    container: AppContainer = Depends(get_container),
) -> ReceptionResponse:
    """Open a reception at a pickup point (employees only)."""
    reception = container.pvz_service.create_reception(body.pvz_id)
    return ReceptionResponse.from_domain(reception)


@router.post(
    "/products",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductResponse,
    responses=_ERRORS,
    dependencies=[Depends(require_employee)],
)
def create_product(
    body: CreateProductRequest,
    container: AppContainer = Depends(get_container),
) -> ProductResponse:
    """Add a product to the open reception (employees only)."""
    product = container.pvz_service.create_product(body.pvz_id, body.type)
    return ProductResponse.from_domain(product)


@router.post(
    "/pvz/{pvz_id}/delete_last_product",
    responses=_ERRORS,
    dependencies=[Depends(require_employee)],
)
def delete_last_product(
    pvz_id: UUID,
    container: AppContainer = Depends(get_container),
) -> Response:
    """Remove the last added product of the open reception (LIFO)."""
    container.pvz_service.delete_last_product(pvz_id)
    return Response(status_code=status.HTTP_200_OK)


@router.post(
    "/pvz/{pvz_id}/close_last_reception",
    response_model=ReceptionResponse,
    responses=_ERRORS,
    dependencies=[Depends(require_employee)],
)
def close_last_reception(
    pvz_id: UUID,
    container: AppContainer = Depends(get_container),
) -> ReceptionResponse:
    """Close the open reception of a pickup point."""
    reception = container.pvz_service.close_reception(pvz_id)
    return ReceptionResponse.from_domain(reception)
