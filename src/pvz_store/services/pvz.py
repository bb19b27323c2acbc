"""Pickup point, reception and product lifecycle rules."""

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from pvz_store.domain.pvz import (
    City,
    PickupPoint,
    PickupPointDetail,
    Product,
    ProductType,
    Reception,
    ReceptionWithProducts,
)
from pvz_store.errors import (
    InvalidRegistrationDate,
    NoProductsToDelete,
    PickupPointNotFound,
    ReceptionAlreadyOpen,
    ReceptionNotFound,
    ReceptionNotOpen,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class PvzRepository(Protocol):
    """Persistence interface for pickup points, receptions and products."""

    def create_pickup_point(
        self, pvz_id: UUID, city: City, registration_date: datetime
    ) -> PickupPoint:
        """Insert a pickup point; raise PickupPointAlreadyExists on id collision."""

    def pickup_point_exists(self, pvz_id: UUID) -> bool:
        """Return whether the pickup point exists."""

    def list_pickup_points(self, page: int, limit: int) -> list[PickupPoint]:
        """Return one page of pickup points."""

    def list_all_pickup_points(self) -> list[PickupPoint]:
        """Return every pickup point."""

    def create_reception(self, pvz_id: UUID) -> Reception:
        """Insert an open reception; raise ReceptionAlreadyOpen if one exists."""

    def get_latest_reception(self, pvz_id: UUID) -> Reception | None:
        """Return the most recently created reception of a pickup point."""

    def close_reception(self, reception_id: UUID) -> Reception | None:
        """Close the reception if it is still open; return None otherwise."""

    def list_receptions(
        self,
        pvz_ids: list[UUID],
        start_date: datetime | None,
        end_date: datetime | None,
    ) -> list[Reception]:
        """Return receptions of the given points created within the range."""

    def create_product(
        self, reception_id: UUID, product_type: ProductType
    ) -> Product | None:
        """Insert a product if the reception is open; return None otherwise."""

    def delete_last_product(self, reception_id: UUID) -> Product | None:
        """Delete and return the newest product of a reception, if any."""

    def list_products(self, reception_ids: list[UUID]) -> list[Product]:
        """Return products belonging to the given receptions."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class PvzService:
    """Enforces the reception and product lifecycle for pickup points."""

    repository: PvzRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def create_pickup_point(
        self, pvz_id: UUID, city: City, registration_date: datetime
    ) -> PickupPoint:
        """Register a pickup point; the date must not be in the future."""
        if _as_aware(registration_date) > self.clock():
            raise InvalidRegistrationDate
        return self.repository.create_pickup_point(pvz_id, city, registration_date)

    def create_reception(self, pvz_id: UUID) -> Reception:
        """Open a new reception unless one is already in progress."""
        if not self.repository.pickup_point_exists(pvz_id):
            raise PickupPointNotFound
        latest = self.repository.get_latest_reception(pvz_id)
        if latest is not None and latest.is_open:
            raise ReceptionAlreadyOpen
        return self.repository.create_reception(pvz_id)

    def close_reception(self, pvz_id: UUID) -> Reception:
        """Close the open reception of a pickup point."""
        reception = self.resolve_active_reception(pvz_id)
        closed = self.repository.close_reception(reception.id)
        if closed is None:
            raise ReceptionNotOpen
        return closed

    def create_product(self, pvz_id: UUID, product_type: ProductType) -> Product:
        """Add a product to the open reception of a pickup point."""
        reception = self.resolve_active_reception(pvz_id)
        product = self.repository.create_product(reception.id, product_type)
        if product is None:
            raise ReceptionNotOpen
        return product

    def delete_last_product(self, pvz_id: UUID) -> None:
        """Remove the most recently added product of the open reception."""
        reception = self.resolve_active_reception(pvz_id)
        if self.repository.delete_last_product(reception.id) is None:
            raise NoProductsToDelete

    def resolve_active_reception(self, pvz_id: UUID) -> Reception:
        """Return the open reception, checking existence, presence, then status."""
        if not self.repository.pickup_point_exists(pvz_id):
            raise PickupPointNotFound
        reception = self.repository.get_latest_reception(pvz_id)
        if reception is None:
            raise ReceptionNotFound
        if not reception.is_open:
            raise ReceptionNotOpen
        return reception

    def list_pickup_points_with_detail(
        self,
        page: int | None = None,
        limit: int | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[PickupPointDetail]:
        """Return a page of pickup points with receptions and products nested."""
        page = page if page and page > 0 else DEFAULT_PAGE
        limit = limit if limit and limit > 0 else DEFAULT_LIMIT

        points = self.repository.list_pickup_points(page, limit)
        if not points:
            return []

        receptions = self.repository.list_receptions(
            [point.id for point in points], start_date, end_date
        )
        products = (
            self.repository.list_products([reception.id for reception in receptions])
            if receptions
            else []
        )

        products_by_reception: dict[UUID, list[Product]] = defaultdict(list)
        for product in products:
            products_by_reception[product.reception_id].append(product)

        receptions_by_point: dict[UUID, list[ReceptionWithProducts]] = defaultdict(
            list
        )
        for reception in receptions:
            receptions_by_point[reception.pvz_id].append(
                ReceptionWithProducts(
                    reception=reception,
                    products=products_by_reception.get(reception.id, []),
                )
            )

        return [
            PickupPointDetail(
                pvz=point, receptions=receptions_by_point.get(point.id, [])
            )
            for point in points
        ]

    def list_pickup_points(self) -> list[PickupPoint]:
        """Return every pickup point without pagination."""
        return self.repository.list_all_pickup_points()


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
