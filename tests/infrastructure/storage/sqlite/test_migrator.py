"""Unit tests for database migrator."""

from pathlib import Path

import aiosqlite

from billing.infrastructure.storage.sqlite.migrations.migrator import (
    Migration,
    create_backup,
    current_version,
    discover_migrations,
    get_migration_status,
    initialize_database,
    restore_backup,
)


class TestMigration:
    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v001_initial_schema.sql"
        migration_file.write_text("SELECT 1;")

        info = Migration.load(migration_file)

        assert info.version == "001"
        assert info.name == "initial_schema"
        assert info.checksum


class TestDiscoverMigrations:
    def test_bundled_migrations_found(self):
        versions = [m.version for m in discover_migrations()]
        assert versions[0] == "001"
        assert versions == sorted(versions)

    def test_invalid_names_skipped(self, tmp_path: Path):
        (tmp_path / "v002_second.sql").write_text("SELECT 1;")
        (tmp_path / "vbad.sql").write_text("SELECT 1;")
        assert [m.version for m in discover_migrations(tmp_path)] == ["002"]


class TestInitializeDatabase:
    async def test_creates_schema(self, temp_db_path: Path):
        results = await initialize_database(temp_db_path, create_backup_before=False)

        assert results and all(r.success for r in results)
        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            )
            tables = {row[0] for row in await cursor.fetchall()}
            assert {"products", "invoices", "invoice_items", "invoice_sequences"} <= tables
            assert await current_version(conn) == "001"

    async def test_second_run_is_noop(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        assert await initialize_database(temp_db_path) == []

    async def test_status_reports_pending(self, temp_db_path: Path):
        status = await get_migration_status(temp_db_path)
        assert status["exists"] is False
        assert "001" in status["pending_migrations"]

        await initialize_database(temp_db_path, create_backup_before=False)
        status = await get_migration_status(temp_db_path)
        assert status["current_version"] == "001"
        assert status["pending_migrations"] == []


class TestBackups:
    def test_backup_and_restore(self, tmp_path: Path):
        db_path = tmp_path / "billing.db"
        db_path.write_bytes(b"original")

        backup = create_backup(db_path)
        db_path.write_bytes(b"changed")
        restore_backup(db_path, backup)

        assert db_path.read_bytes() == b"original"
