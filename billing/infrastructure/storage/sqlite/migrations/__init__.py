"""Versioned SQL migrations for the billing database."""

from billing.infrastructure.storage.sqlite.migrations.migrator import (
    discover_migrations,
    get_migration_status,
    initialize_database,
)

__all__ = ["discover_migrations", "get_migration_status", "initialize_database"]
