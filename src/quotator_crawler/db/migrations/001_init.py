"""Peewee migrations -- 001_init.py."""

import peewee as pw
from peewee_migrate import Migrator


def migrate(migrator: Migrator, database: pw.Database, *, fake=False):  # noqa: ARG001
    """Create the pricing tables.

    IF NOT EXISTS leaves tables created by the quote API or an older crawler alone.
    """
    migrator.sql(
        """
        CREATE TABLE IF NOT EXISTS "flavors" (
            "id" TEXT NOT NULL PRIMARY KEY,
            "name" TEXT NOT NULL,
            "vcpus" INTEGER NOT NULL,
            "ram_gb" REAL NOT NULL,
            "price_hourly" REAL NOT NULL,
            "price_monthly" REAL NOT NULL DEFAULT 0,
            "price_yearly_1" REAL NOT NULL DEFAULT 0,
            "price_yearly_3" REAL NOT NULL DEFAULT 0,
            "region" TEXT NOT NULL,
            "created_at" TEXT NOT NULL
        )
    """
    )

    migrator.sql(
        """
        CREATE TABLE IF NOT EXISTS "disk_types" (
            "id" TEXT NOT NULL PRIMARY KEY,
            "name" TEXT NOT NULL,
            "price_per_gb" REAL NOT NULL,
            "region" TEXT NOT NULL,
            "created_at" TEXT NOT NULL
        )
    """
    )


def rollback(migrator: Migrator, database: pw.Database, *, fake=False):  # noqa: ARG001
    """Drop the pricing tables."""
    migrator.sql('DROP TABLE IF EXISTS "disk_types"')
    migrator.sql('DROP TABLE IF EXISTS "flavors"')
