from __future__ import annotations

import random
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest
import sqlalchemy as sa


def test_seed_against_migrated_postgres(migrated_db: str) -> None:
    from db.seed import seed

    assert seed(migrated_db, seed_value=1337) == {"city": 3, "customer": 3, "order": 3}
    assert seed(migrated_db, seed_value=1338) == {"city": 3, "customer": 3, "order": 3}


def test_referential_integrity_on_postgres(migrated_db: str) -> None:
    from db.engine import create_engine
    from db.schema import cities, customers, orders
    from db.seed import seed_connection

    eng = create_engine(migrated_db)
    try:
        with eng.begin() as conn:
            seed_connection(conn, rng=random.Random(1), today=date(2026, 10, 19))

        with eng.connect() as conn:
            orphans = conn.execute(
                sa.select(sa.func.count())
                .select_from(customers.outerjoin(cities, customers.c.cityId == cities.c.id))
                .where(cities.c.id.is_(None))
            ).scalar_one()
            assert orphans == 0
            orphan_orders = conn.execute(
                sa.select(sa.func.count())
                .select_from(orders.outerjoin(customers, orders.c.customerId == customers.c.id))
                .where(customers.c.id.is_(None))
            ).scalar_one()
            assert orphan_orders == 0
            dates = conn.execute(sa.select(orders.c.orderDate).distinct()).scalars().all()
            assert dates == [date(2026, 10, 19)]

        with eng.connect() as conn:
            with pytest.raises(sa.exc.IntegrityError):
                conn.execute(cities.delete())
    finally:
        eng.dispose()


def test_concurrent_seeds_leave_exactly_one_dataset(migrated_db: str) -> None:
    from db.engine import create_engine
    from db.seed import seed, table_counts

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda n: seed(migrated_db, seed_value=n), range(4)))

    assert results == [{"city": 3, "customer": 3, "order": 3}] * 4

    eng = create_engine(migrated_db)
    try:
        with eng.connect() as conn:
            assert table_counts(conn) == {"city": 3, "customer": 3, "order": 3}
    finally:
        eng.dispose()
