"""Supabase-backed pickup point, reception and product repository."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from pvz_store.adapters.postgrest_errors import is_unique_violation
from pvz_store.domain.pvz import (
    City,
    PickupPoint,
    Product,
    ProductType,
    Reception,
    ReceptionStatus,
)
from pvz_store.errors import (
    PickupPointAlreadyExists,
    ReceptionAlreadyOpen,
    StorageError,
)
from pvz_store.services.pvz import PvzRepository

logger = logging.getLogger(__name__)

_PVZ_COLUMNS = "id, city, registration_date"
_RECEPTION_COLUMNS = "id, pvz_id, status, created_at"
_PRODUCT_COLUMNS = "id, reception_id, type, created_at"

_PVZ_PKEY = "pvz_pkey"
_ONE_OPEN_RECEPTION = "receptions_one_open_per_pvz"


@dataclass
class SupabasePvzRepository(PvzRepository):
    """Supabase implementation for the reception lifecycle tables."""

    client: Client

    def create_pickup_point(
        self, pvz_id: UUID, city: City, registration_date: datetime
    ) -> PickupPoint:
        """Insert a pickup point row and return it."""
        try:
            response = (
                self.client.table("pvz")
                .insert(
                    {
                        "id": str(pvz_id),
                        "city": str(city),
                        "registration_date": registration_date.isoformat(),
                    }
                )
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc, _PVZ_PKEY):
                raise PickupPointAlreadyExists from exc
            logger.exception("Failed to create pickup point", extra={"pvz_id": pvz_id})
            raise StorageError("could not create pickup point") from exc
        if not response.data:
            raise StorageError("could not create pickup point")
        return _parse_pvz(response.data[0])

    def pickup_point_exists(self, pvz_id: UUID) -> bool:
        """Return whether a pickup point row exists."""
        response = self._run(
            "check pickup point",
            lambda: self.client.table("pvz")
            .select("id")
            .eq("id", str(pvz_id))
            .limit(1)
            .execute(),
        )
        return bool(response.data)

    def list_pickup_points(self, page: int, limit: int) -> list[PickupPoint]:
        """Return one page of pickup points, newest registration first."""
        offset = (page - 1) * limit
        response = self._run(
            "list pickup points",
            lambda: self.client.table("pvz")
            .select(_PVZ_COLUMNS)
            .order("registration_date", desc=True)
            .range(offset, offset + limit - 1)
            .execute(),
        )
        return [_parse_pvz(row) for row in response.data or []]

    def list_all_pickup_points(self) -> list[PickupPoint]:
        """Return every pickup point, newest registration first."""
        response = self._run(
            "list all pickup points",
            lambda: self.client.table("pvz")
            .select(_PVZ_COLUMNS)
            .order("registration_date", desc=True)
            .execute(),
        )
        return [_parse_pvz(row) for row in response.data or []]

    def create_reception(self, pvz_id: UUID) -> Reception:
        """Insert an open reception; the partial unique index rejects a second."""
        try:
            response = (
                self.client.table("receptions")
                .insert(
                    {"pvz_id": str(pvz_id), "status": str(ReceptionStatus.IN_PROGRESS)}
                )
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc, _ONE_OPEN_RECEPTION):
                raise ReceptionAlreadyOpen from exc
            logger.exception("Failed to create reception", extra={"pvz_id": pvz_id})
            raise StorageError("could not create reception") from exc
        if not response.data:
            raise StorageError("could not create reception")
        return _parse_reception(response.data[0])

    def get_latest_reception(self, pvz_id: UUID) -> Reception | None:
        """Return the most recently created reception of a pickup point."""
        response = self._run(
            "get latest reception",
            lambda: self.client.table("receptions")
            .select(_RECEPTION_COLUMNS)
            .eq("pvz_id", str(pvz_id))
            .order("created_at", desc=True)
            .limit(1)
            .execute(),
        )
        if not response.data:
            return None
        return _parse_reception(response.data[0])

    def close_reception(self, reception_id: UUID) -> Reception | None:
        """Close the reception only while it is still in progress."""
        response = self._run(
            "close reception",
            lambda: self.client.table("receptions")
            .update({"status": str(ReceptionStatus.CLOSED)})
            .eq("id", str(reception_id))
            .eq("status", str(ReceptionStatus.IN_PROGRESS))
            .execute(),
        )
        if not response.data:
            return None
        return _parse_reception(response.data[0])

    def list_receptions(
        self,
        pvz_ids: list[UUID],
        start_date: datetime | None,
        end_date: datetime | None,
    ) -> list[Reception]:
        """Return receptions of the given points created within the range."""
        if not pvz_ids:
            return []

        def query() -> Any:
            request = (
                self.client.table("receptions")
                .select(_RECEPTION_COLUMNS)
                .in_("pvz_id", [str(pvz_id) for pvz_id in pvz_ids])
            )
            if start_date is not None:
                request = request.gte("created_at", start_date.isoformat())
            if end_date is not None:
                request = request.lte("created_at", end_date.isoformat())
            return request.order("created_at", desc=False).execute()

        response = self._run("list receptions", query)
        return [_parse_reception(row) for row in response.data or []]

    def create_product(
        self, reception_id: UUID, product_type: ProductType
    ) -> Product | None:
        """Insert a product through the guarded ``create_product`` function."""
        response = self._run(
            "create product",
            lambda: self.client.rpc(
                "create_product",
                {"p_reception_id": str(reception_id), "p_type": str(product_type)},
            ).execute(),
        )
        if not response.data:
            return None
        return _parse_product(response.data[0])

    def delete_last_product(self, reception_id: UUID) -> Product | None:
        """Delete the newest product through ``delete_last_product``."""
        response = self._run(
            "delete last product",
            lambda: self.client.rpc(
                "delete_last_product", {"p_reception_id": str(reception_id)}
            ).execute(),
        )
        if not response.data:
            return None
        return _parse_product(response.data[0])

    def list_products(self, reception_ids: list[UUID]) -> list[Product]:
        """Return products of the given receptions in creation order."""
        if not reception_ids:
            return []
        response = self._run(
            "list products",
            lambda: self.client.table("products")
            .select(_PRODUCT_COLUMNS)
            .in_("reception_id", [str(reception_id) for reception_id in reception_ids])
            .order("created_at", desc=False)
            .execute(),
        )
        return [_parse_product(row) for row in response.data or []]

    def _run(self, action: str, execute: Callable[[], Any]) -> Any:
        try:
            return execute()
        except APIError as exc:
            logger.exception("Supabase call failed", extra={"action": action})
            raise StorageError(f"could not {action}") from exc


def _parse_timestamp(raw: object) -> datetime:
    if not isinstance(raw, str) or not raw:
        raise StorageError(f"unexpected timestamp value: {raw!r}")
    return datetime.fromisoformat(raw)


def _parse_pvz(row: dict[str, object]) -> PickupPoint:
    return PickupPoint(
        id=UUID(str(row["id"])),
        city=City(row["city"]),
        registration_date=_parse_timestamp(row.get("registration_date")),
    )


def _parse_reception(row: dict[str, object]) -> Reception:
    return Reception(
        id=UUID(str(row["id"])),
        pvz_id=UUID(str(row["pvz_id"])),
        status=ReceptionStatus(row["status"]),
        date_time=_parse_timestamp(row.get("created_at")),
    )


def _parse_product(row: dict[str, object]) -> Product:
    return Product(
        id=UUID(str(row["id"])),
        reception_id=UUID(str(row["reception_id"])),
        type=ProductType(row["type"]),
        date_time=_parse_timestamp(row.get("created_at")),
    )
