from __future__ import annotations

import asyncio
import random
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import sqlalchemy as sa
from fastapi import Depends, FastAPI, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from db.logging import configure_logging, logger
from db.schema import cities, customers, orders
from db.seed import seed_connection, table_counts
from services.demo.app import observability
from services.demo.app.db import ENGINE, get_session
from services.demo.app.schemas import (
    AdminSeedRequest,
    AdminSeedResponse,
    CitiesResponse,
    CityOut,
    CustomerOut,
    CustomersResponse,
    OrderOut,
    OrdersResponse,
    StatsResponse,
)
from services.demo.app.settings import SETTINGS


async def run_seed(lock: asyncio.Lock, seed_value: int | None, trigger: str) -> dict[str, int]:
    """Reset and reseed in one transaction on the service engine; errors propagate."""
    start = time.perf_counter()
    # One run per process at a time; seed_connection also locks across processes.
    async with lock:
        async with ENGINE.begin() as conn:
            await conn.run_sync(seed_connection, rng=random.Random(seed_value))
            counts = await conn.run_sync(table_counts)
    observability.SEED_LATENCY.observe((time.perf_counter() - start) * 1000)
    observability.SEED_RUNS_TOTAL.labels(trigger).inc()
    return counts


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    app.state.seed_lock = asyncio.Lock()
    if SETTINGS.seed_on_startup:
        counts = await run_seed(app.state.seed_lock, SETTINGS.seed_value, trigger="startup")
        logger.info("startup_seed_finished", seed=SETTINGS.seed_value, counts=counts)
    yield
    await ENGINE.dispose()


app = FastAPI(title="City Customer Order Demo API", version="0.1.0", lifespan=lifespan)
configure_logging(SETTINGS.log_level)
if SETTINGS.otel_enabled:
    provider = observability.setup_tracing(app, service_name="demo")
    observability.instrument_sqlalchemy(ENGINE, provider)
observability.add_metrics_middleware(app, service_name="demo")


def _require_admin(x_admin_token: str | None) -> None:
    if not x_admin_token or x_admin_token != SETTINGS.admin_token:
        raise HTTPException(status_code=403, detail="forbidden")


@app.get("/healthz")
async def healthz(session: AsyncSession = Depends(get_session)) -> dict:
    await session.execute(sa.text("SELECT 1"))
    return {"ok": True}


@app.get("/cities", response_model=CitiesResponse)
async def list_cities(session: AsyncSession = Depends(get_session)) -> CitiesResponse:
    rows = (await session.execute(sa.select(cities).order_by(cities.c.id))).mappings().all()
    return CitiesResponse(cities=[CityOut(id=r["id"], name=r["name"]) for r in rows])


@app.get("/customers", response_model=CustomersResponse)
async def list_customers(
    city_id: int | None = None,
    session: AsyncSession = Depends(get_session),
) -> CustomersResponse:
    q = sa.select(customers).order_by(customers.c.id)
    if city_id is not None:
        q = q.where(customers.c.cityId == city_id)
    rows = (await session.execute(q)).mappings().all()
    return CustomersResponse(
        customers=[CustomerOut(id=r["id"], name=r["name"], age=r["age"], city_id=r["cityId"]) for r in rows]
    )


@app.get("/orders", response_model=OrdersResponse)
async def list_orders(
    customer_id: int | None = None,
    session: AsyncSession = Depends(get_session),
) -> OrdersResponse:
    q = sa.select(orders).order_by(orders.c.id)
    if customer_id is not None:
        q = q.where(orders.c.customerId == customer_id)
    rows = (await session.execute(q)).mappings().all()
    return OrdersResponse(
        orders=[
            OrderOut(id=r["id"], sku=r["sku"], order_date=r["orderDate"], customer_id=r["customerId"])
            for r in rows
        ]
    )


@app.get("/stats", response_model=StatsResponse)
async def stats(session: AsyncSession = Depends(get_session)) -> StatsResponse:
    counts = await session.run_sync(lambda s: table_counts(s.connection()))
    return StatsResponse(counts=counts)


@app.post("/admin/seed", response_model=AdminSeedResponse)
async def admin_seed(
    req: AdminSeedRequest,
    request: Request,
    x_admin_token: str | None = Header(default=None),
) -> AdminSeedResponse:
    _require_admin(x_admin_token)
    counts = await run_seed(request.app.state.seed_lock, req.seed, trigger="admin")
    logger.info("admin_seed_finished", seed=req.seed, counts=counts)
    return AdminSeedResponse(seed=req.seed, counts=counts)
