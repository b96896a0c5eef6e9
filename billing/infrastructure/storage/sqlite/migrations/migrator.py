"""
Schema migrations for the billing database.

Migrations are ``vNNN_<name>.sql`` scripts in this package, applied in
version order and recorded in ``schema_migrations`` with a checksum of
their text. A script whose checksum no longer matches the recorded one
is reported and left alone. The database file is copied aside before a
run and restored from that copy if the run raises.
"""

import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from billing.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
_FILENAME = re.compile(r"v(\d+)_(\w+)\.sql$")


@dataclass(frozen=True)
class Migration:
    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def load(cls, path: Path) -> "Migration":
        match = _FILENAME.fullmatch(path.name)
        if match is None:
            raise ValueError(f"Not a migration script: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(match.group(1), match.group(2), path, digest[:16])


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """Migration scripts in *directory*, lowest version first."""
    found: list[Migration] = []
    for path in sorted(directory.glob("v*.sql")):
        try:
            found.append(Migration.load(path))
        except ValueError as e:
            logger.warning("migration_file_ignored", path=str(path), error=str(e))
    return found


async def applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    """Recorded ``version -> checksum``; empty before the first migration."""
    try:
        async with conn.execute("SELECT version, checksum FROM schema_migrations") as cur:
            return {version: checksum async for version, checksum in cur}
    except aiosqlite.OperationalError:
        return {}


async def current_version(conn: aiosqlite.Connection) -> str | None:
    versions = await applied_checksums(conn)
    return max(versions) if versions else None


async def _apply(conn: aiosqlite.Connection, migration: Migration) -> MigrationResult:
    started = time.perf_counter()
    error: str | None = None
    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        elapsed = int((time.perf_counter() - started) * 1000)
        await conn.execute(
            "INSERT OR REPLACE INTO schema_migrations "
            "(version, name, checksum, execution_time_ms) VALUES (?, ?, ?, ?)",
            (migration.version, migration.name, migration.checksum, elapsed),
        )
        await conn.commit()
    except (aiosqlite.Error, OSError) as e:
        await conn.rollback()
        error = str(e)

    elapsed = int((time.perf_counter() - started) * 1000)
    if error is None:
        logger.info("migration_applied", version=migration.version, ms=elapsed)
    else:
        logger.error("migration_failed", version=migration.version, error=error)
    return MigrationResult(migration.version, migration.name, error is None, elapsed, error)


def create_backup(db_path: Path) -> Path:
    """Copy *db_path* next to itself with a timestamp suffix."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_name(f"{db_path.stem}.backup_{stamp}{db_path.suffix}")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.warning("database_restored", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool | None = None,
) -> list[MigrationResult]:
    """
    Apply every pending migration to *db_path*.

    Stops at the first failing script. Returns one result per script that
    was attempted, so an up-to-date database yields an empty list.
    """
    storage = get_settings().storage
    db_path = db_path or storage.db_path
    if create_backup_before is None:
        create_backup_before = storage.backup_before_migrate
    db_path.parent.mkdir(parents=True, exist_ok=True)

    backup_path = create_backup(db_path) if create_backup_before and db_path.exists() else None
    results: list[MigrationResult] = []

    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")
            recorded = await applied_checksums(conn)

            for migration in discover_migrations():
                if migration.version in recorded:
                    if recorded[migration.version] != migration.checksum:
                        logger.warning("migration_checksum_mismatch", version=migration.version)
                    continue
                result = await _apply(conn, migration)
                results.append(result)
                if not result.success:
                    break
    except Exception:
        logger.exception("database_initialization_failed", db_path=str(db_path))
        if backup_path is not None:
            restore_backup(db_path, backup_path)
        raise

    if backup_path is not None and all(r.success for r in results):
        backup_path.unlink()

    logger.info("database_ready", db_path=str(db_path), applied=len(results))
    return results


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Current version plus applied and pending versions."""
    db_path = db_path or get_settings().storage.db_path
    known = [m.version for m in discover_migrations()]

    applied: list[str] = []
    if db_path.exists():
        async with aiosqlite.connect(db_path) as conn:
            applied = sorted(await applied_checksums(conn))

    return {
        "exists": db_path.exists(),
        "current_version": applied[-1] if applied else None,
        "applied_migrations": applied,
        "pending_migrations": [v for v in known if v not in applied],
        "total_migrations": len(known),
    }
