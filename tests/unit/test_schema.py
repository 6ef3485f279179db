from __future__ import annotations

from datetime import date

import pytest
import sqlalchemy as sa


def test_create_tables_is_idempotent(engine) -> None:
    from db.schema import create_tables

    with engine.begin() as conn:
        create_tables(conn)
        create_tables(conn)
        names = set(sa.inspect(conn).get_table_names())

    assert {"city", "customer", "order"} <= names


def test_tables_are_parent_first() -> None:
    from db.schema import ALL_TABLES

    assert [t.name for t in ALL_TABLES] == ["city", "customer", "order"]


def test_name_columns_are_bounded_and_required() -> None:
    from db.schema import NAME_LENGTH, cities, customers

    assert NAME_LENGTH == 50
    assert cities.c.name.type.length == 50
    assert customers.c.name.type.length == 50
    assert cities.c.name.nullable is False
    assert customers.c.name.nullable is False


def test_foreign_keys_point_at_parents(engine) -> None:
    from db.schema import create_tables

    with engine.begin() as conn:
        create_tables(conn)
        insp = sa.inspect(conn)
        customer_fks = insp.get_foreign_keys("customer")
        order_fks = insp.get_foreign_keys("order")

    assert [(fk["constrained_columns"], fk["referred_table"], fk["referred_columns"]) for fk in customer_fks] == [
        (["cityId"], "city", ["id"])
    ]
    assert [(fk["constrained_columns"], fk["referred_table"], fk["referred_columns"]) for fk in order_fks] == [
        (["customerId"], "customer", ["id"])
    ]


def test_customer_requires_city(engine) -> None:
    from db.schema import create_tables, customers

    with engine.begin() as conn:
        create_tables(conn)

    with engine.connect() as conn:
        with pytest.raises(sa.exc.IntegrityError):
            conn.execute(customers.insert().values(name="Dave", age=30, cityId=None))


def test_customer_rejects_unknown_city(engine) -> None:
    from db.schema import create_tables, customers

    with engine.begin() as conn:
        create_tables(conn)

    with engine.connect() as conn:
        with pytest.raises(sa.exc.IntegrityError):
            conn.execute(customers.insert().values(name="Dave", age=30, cityId=999))


def test_order_date_defaults_to_today(engine) -> None:
    from db.schema import cities, create_tables, customers, orders

    with engine.begin() as conn:
        create_tables(conn)
        city_id = conn.execute(cities.insert().values(name="Prague")).inserted_primary_key[0]
        customer_id = conn.execute(
            customers.insert().values(name="Alice", age=21, cityId=city_id)
        ).inserted_primary_key[0]
        conn.execute(orders.insert().values(sku="SKU9", customerId=customer_id))
        order_date = conn.execute(sa.select(orders.c.orderDate)).scalar_one()

    assert order_date == date.today()
