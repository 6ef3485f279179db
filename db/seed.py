from __future__ import annotations

import argparse
import json
import os
import random
from dataclasses import dataclass
from datetime import date
from typing import Any

import sqlalchemy as sa

from db.engine import create_engine
from db.logging import configure_logging, logger, redact_url
from db.schema import ALL_TABLES, cities, create_tables, customers, orders
from db.settings import SETTINGS


@dataclass(frozen=True)
class CustomerSpec:
    name: str
    age: int


CITY_NAMES: list[str] = ["St. Petersburg", "Munich", "Prague"]

CUSTOMER_SPECS: list[CustomerSpec] = [
    CustomerSpec(name="Alice", age=21),
    CustomerSpec(name="Bob", age=22),
    CustomerSpec(name="Carol", age=23),
]

ORDER_SKUS: list[str] = ["SKU1", "SKU2", "SKU3"]


@dataclass(frozen=True)
class SeedResult:
    city_ids: list[int]
    customer_ids: list[int]
    order_ids: list[int]

    def counts(self) -> dict[str, int]:
        return {
            cities.name: len(self.city_ids),
            customers.name: len(self.customer_ids),
            orders.name: len(self.order_ids),
        }


def _insert_and_get_id(conn: sa.Connection, table: sa.Table, values: dict[str, Any]) -> int:
    result = conn.execute(table.insert().values(values))
    return int(result.inserted_primary_key[0])


# Arbitrary key shared by every seeder process on the same database.
SEED_LOCK_KEY = 0x5EED


def lock_for_seeding(conn: sa.Connection) -> None:
    """
    Serialize concurrent seed runs on PostgreSQL.

    Under READ COMMITTED a second run's DELETE cannot see the first run's uncommitted rows,
    so both runs would commit their inserts. The advisory lock is released at commit or
    rollback. SQLite already serializes writers.
    """
    if conn.dialect.name == "postgresql":
        conn.execute(sa.text("SELECT pg_advisory_xact_lock(:key)"), {"key": SEED_LOCK_KEY})


def clear_tables(conn: sa.Connection) -> None:
    # Children first: order -> customer -> city.
    for table in reversed(ALL_TABLES):
        conn.execute(table.delete())


def table_counts(conn: sa.Connection) -> dict[str, int]:
    return {
        table.name: conn.execute(sa.select(sa.func.count()).select_from(table)).scalar_one()
        for table in ALL_TABLES
    }


def seed_connection(
    conn: sa.Connection,
    *,
    rng: random.Random | None = None,
    today: date | None = None,
) -> SeedResult:
    """
    Reset the demo tables and insert the fixed cities, customers and orders.

    The caller owns the transaction: run this inside `engine.begin()` (or
    `AsyncConnection.run_sync`) so that the delete and insert phases commit or roll
    back together. Each customer gets an independently drawn random city and each order
    an independently drawn random customer, so repeats are expected.
    """
    if rng is None:
        rng = random.Random()
    if today is None:
        today = date.today()

    lock_for_seeding(conn)
    create_tables(conn)
    clear_tables(conn)

    city_ids = [_insert_and_get_id(conn, cities, {"name": name}) for name in CITY_NAMES]

    customer_ids = [
        _insert_and_get_id(
            conn,
            customers,
            {"name": spec.name, "age": spec.age, "cityId": rng.choice(city_ids)},
        )
        for spec in CUSTOMER_SPECS
    ]

    order_ids = [
        _insert_and_get_id(
            conn,
            orders,
            {"sku": sku, "orderDate": today, "customerId": rng.choice(customer_ids)},
        )
        for sku in ORDER_SKUS
    ]

    result = SeedResult(city_ids=city_ids, customer_ids=customer_ids, order_ids=order_ids)
    logger.info("seed_finished", order_date=today.isoformat(), **result.counts())
    return result


def seed(database_url: str, seed_value: int | None = None) -> dict[str, int]:
    engine = create_engine(database_url)
    try:
        with engine.begin() as conn:
            seed_connection(conn, rng=random.Random(seed_value))
            counts = table_counts(conn)
    finally:
        engine.dispose()
    return counts


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Reset and reseed the city/customer/order demo tables.")
    parser.add_argument("--database-url", default=os.getenv("DATABASE_URL") or SETTINGS.database_url)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible run.")
    parser.add_argument("--log-level", default=SETTINGS.log_level)
    parser.add_argument("--log-format", choices=["json", "console"], default="json")
    args = parser.parse_args(argv)

    configure_logging(args.log_level, log_format=args.log_format)
    try:
        counts = seed(args.database_url, seed_value=args.seed)
    except sa.exc.SQLAlchemyError:
        logger.exception("seed_failed", database_url=redact_url(args.database_url))
        raise SystemExit(1)

    print(json.dumps({"seed": args.seed, "counts": counts}, indent=2))


if __name__ == "__main__":
    main()
