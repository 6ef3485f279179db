from __future__ import annotations

from datetime import date

import sqlalchemy as sa


NAME_LENGTH = 50

metadata = sa.MetaData()

cities = sa.Table(
    "city",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
    sa.Column("name", sa.String(NAME_LENGTH), nullable=False),
)

customers = sa.Table(
    "customer",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
    sa.Column("name", sa.String(NAME_LENGTH), nullable=False),
    sa.Column("age", sa.Integer(), nullable=False),
    sa.Column("cityId", sa.Integer(), sa.ForeignKey("city.id"), nullable=False),
)

orders = sa.Table(
    "order",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
    sa.Column("sku", sa.Text(), nullable=False),
    sa.Column("orderDate", sa.Date(), nullable=False, default=date.today),
    sa.Column("customerId", sa.Integer(), sa.ForeignKey("customer.id"), nullable=False),
)

# Parent-first. Delete in reverse.
ALL_TABLES: tuple[sa.Table, ...] = (cities, customers, orders)


def create_tables(conn: sa.Connection) -> None:
    metadata.create_all(conn, tables=list(ALL_TABLES), checkfirst=True)
