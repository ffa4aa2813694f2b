"""Peewee migrations -- 002_add_flavor_price_tiers.py."""

import peewee as pw
from peewee_migrate import Migrator

TIER_COLUMNS = ("price_monthly", "price_yearly_1", "price_yearly_3")


def migrate(migrator: Migrator, database: pw.Database, *, fake=False):  # noqa: ARG001
    """Add the commitment tier columns to flavors tables that predate them."""
    existing = {column.name for column in database.get_columns("flavors")}

    for column in TIER_COLUMNS:
        if column not in existing:
            migrator.sql(
                f"""
                ALTER TABLE "flavors"
                ADD COLUMN "{column}" REAL NOT NULL DEFAULT 0
            """
            )


def rollback(migrator: Migrator, database: pw.Database, *, fake=False):  # noqa: ARG001
    """Tier columns stay: 001 creates them on fresh stores."""
    pass
