from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class CityOut(StrictModel):
    id: int
    name: str


class CustomerOut(StrictModel):
    id: int
    name: str
    age: int
    city_id: int


class OrderOut(StrictModel):
    id: int
    sku: str
    order_date: date
    customer_id: int


class CitiesResponse(StrictModel):
    cities: list[CityOut]


class CustomersResponse(StrictModel):
    customers: list[CustomerOut]


class OrdersResponse(StrictModel):
    orders: list[OrderOut]


class StatsResponse(StrictModel):
    counts: dict[str, int]


class AdminSeedRequest(StrictModel):
    # None draws fresh randomness, an int makes the city/customer links reproducible.
    seed: int | None = None


class AdminSeedResponse(StrictModel):
    seed: int | None
    counts: dict[str, int]
