"""Pydantic request and response models for the REST API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from pvz_store.domain.pvz import (
    City,
    PickupPoint,
    PickupPointDetail,
    Product,
    ProductType,
    Reception,
    ReceptionStatus,
    ReceptionWithProducts,
)
from pvz_store.domain.users import UserRecord, UserRole


class ApiModel(BaseModel):
    """Base model accepting both field names and camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(ApiModel):
    message: str


class DummyLoginRequest(ApiModel):
    role: UserRole


class RegisterRequest(ApiModel):
    email: EmailStr
    password: str
    role: UserRole


class LoginRequest(ApiModel):
    email: EmailStr
    password: str


class UserResponse(ApiModel):
    id: UUID
    email: str
    role: UserRole

    @classmethod
    def from_domain(cls, user: UserRecord) -> "UserResponse":
        return cls(id=user.id, email=user.email, role=user.role)


class CreatePvzRequest(ApiModel):
    id: UUID | None = None
    registration_date: datetime | None = Field(default=None, alias="registrationDate")
    city: City


class PvzResponse(ApiModel):
    id: UUID
    registration_date: datetime = Field(alias="registrationDate")
    city: City

    @classmethod
    def from_domain(cls, point: PickupPoint) -> "PvzResponse":
        return cls(
            id=point.id, registration_date=point.registration_date, city=point.city
        )


class CreateReceptionRequest(ApiModel):
    pvz_id: UUID = Field(alias="pvzId")


class ReceptionResponse(ApiModel):
    id: UUID
    date_time: datetime = Field(alias="dateTime")
    pvz_id: UUID = Field(alias="pvzId")
    status: ReceptionStatus

    @classmethod
    def from_domain(cls, reception: Reception) -> "ReceptionResponse":
        return cls(
            id=reception.id,
            date_time=reception.date_time,
            pvz_id=reception.pvz_id,
            status=reception.status,
        )


class CreateProductRequest(ApiModel):
    type: ProductType
    pvz_id: UUID = Field(alias="pvzId")


class ProductResponse(ApiModel):
    id: UUID
    date_time: datetime = Field(alias="dateTime")
    type: ProductType
    reception_id: UUID = Field(alias="receptionId")

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            date_time=product.date_time,
            type=product.type,
            reception_id=product.reception_id,
        )


class ReceptionDetailResponse(ApiModel):
    reception: ReceptionResponse
    products: list[ProductResponse]

    @classmethod
    def from_domain(cls, item: ReceptionWithProducts) -> "ReceptionDetailResponse":
        return cls(
            reception=ReceptionResponse.from_domain(item.reception),
            products=[ProductResponse.from_domain(p) for p in item.products],
        )


class PvzDetailResponse(ApiModel):
    """A pickup point with nested receptions and products."""

    pvz: PvzResponse
    receptions: list[ReceptionDetailResponse]

    @classmethod
    def from_domain(cls, detail: PickupPointDetail) -> "PvzDetailResponse":
        return cls(
            pvz=PvzResponse.from_domain(detail.pvz),
            receptions=[
                ReceptionDetailResponse.from_domain(item) for item in detail.receptions
            ],
        )
