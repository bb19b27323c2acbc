"""Domain models for pickup points, receptions and products."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class City(StrEnum):
    """Cities where pickup points can be opened."""

    MOSCOW = "Москва"
    SAINT_PETERSBURG = "Санкт-Петербург"
    KAZAN = "Казань"


class ProductType(StrEnum):
    """Accepted product categories."""

    ELECTRONICS = "электроника"
    CLOTHES = "одежда"
    SHOES = "обувь"


class ReceptionStatus(StrEnum):
    """Reception lifecycle states. ``CLOSED`` is terminal."""

    IN_PROGRESS = "in_progress"
    CLOSED = "close"


@dataclass(frozen=True)
class PickupPoint:
    """A registered pickup point."""

    id: UUID
    city: City
    registration_date: datetime


@dataclass(frozen=True)
class Reception:
    """A goods-receiving session at a pickup point."""

    id: UUID
    pvz_id: UUID
    status: ReceptionStatus
    date_time: datetime

    @property
    def is_open(self) -> bool:
        return self.status is ReceptionStatus.IN_PROGRESS


@dataclass(frozen=True)
class Product:
    """A product accepted during a reception."""

    id: UUID
    reception_id: UUID
    type: ProductType
    date_time: datetime


@dataclass(frozen=True)
class ReceptionWithProducts:
    reception: Reception
    products: list[Product] = field(default_factory=list)


@dataclass(frozen=True)
class PickupPointDetail:
    """A pickup point with its receptions and their products."""

    pvz: PickupPoint
    receptions: list[ReceptionWithProducts] = field(default_factory=list)
