"""
Billing service management CLI.

Usage:
    python -m billing serve       Apply migrations and start the API server
    python -m billing migrate     Apply pending migrations only
    python -m billing status      Show applied and pending migrations
"""

import argparse
import asyncio
import sys

from billing.config import configure_logging, get_settings


def cmd_serve(args: argparse.Namespace) -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "billing.api.main:create_app",
        factory=True,
        host=args.host or settings.api.host,
        port=args.port or settings.api.port,
        reload=args.reload,
    )


def cmd_migrate(args: argparse.Namespace) -> None:
    from billing.infrastructure.storage.sqlite.migrations import initialize_database

    results = asyncio.run(initialize_database(create_backup_before=False if args.no_backup else None))
    for result in results:
        state = "ok" if result.success else f"FAILED ({result.error})"
        print(f"  {result.version} {result.name}: {state}")
    if not results:
        print("Database is up to date")
    if any(not r.success for r in results):
        sys.exit(1)


def cmd_status(args: argparse.Namespace) -> None:
    from billing.infrastructure.storage.sqlite.migrations import get_migration_status

    status = asyncio.run(get_migration_status())
    print(f"Database exists:  {status['exists']}")
    print(f"Current version:  {status['current_version'] or '-'}")
    print(f"Pending:          {', '.join(status['pending_migrations']) or 'none'}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Billing service management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=None, help="Bind host (default: API_HOST)")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port (default: API_PORT)")
    p_serve.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    p_serve.set_defaults(func=cmd_serve)

    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup (default: STORAGE_BACKUP_BEFORE_MIGRATE)")
    p_migrate.set_defaults(func=cmd_migrate)

    p_status = sub.add_parser("status", help="Show migration status")
    p_status.set_defaults(func=cmd_status)

    args = parser.parse_args()
    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
