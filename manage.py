#!/usr/bin/env python3
"""
StokTakip management CLI.

Usage:
    python manage.py migrate             Apply pending database migrations
    python manage.py status              Show applied and pending migrations
    python manage.py verify              Check foreign keys, integrity and tables
    python manage.py serve               Start the API server
    python manage.py template OUT.xlsx   Write the blank import workbook
    python manage.py export OUT.xlsx     Write current stock levels
"""

import argparse
import asyncio
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent


def _db_path(args: argparse.Namespace) -> Path | None:
    return Path(args.db) if getattr(args, "db", None) else None


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply every pending migration."""
    from src.infrastructure.storage.sqlite.migrations import initialize_database

    results = asyncio.run(
        initialize_database(db_path=_db_path(args), create_backup_before=not args.no_backup)
    )
    if not results:
        print("Database is up to date.")
        return

    for r in results:
        state = "ok" if r.success else f"FAILED: {r.error}"
        print(f"  v{r.version} {r.name} ({r.execution_time_ms} ms) {state}")
    if not all(r.success for r in results):
        sys.exit(1)


def cmd_status(args: argparse.Namespace) -> None:
    """Show migration status."""
    from src.infrastructure.storage.sqlite.migrations import get_migration_status

    status = asyncio.run(get_migration_status(_db_path(args)))
    if not status["exists"]:
        print("Database does not exist yet. Run 'migrate'.")
    else:
        print(f"Current version: {status['current_version'] or '-'}")
        print(f"Applied: {', '.join(status['applied_migrations']) or '-'}")
    print(f"Pending: {', '.join(status['pending_migrations']) or '-'}")


def cmd_verify(args: argparse.Namespace) -> None:
    """Run schema integrity checks."""
    from src.infrastructure.storage.sqlite.migrations import verify_schema_integrity

    checks = asyncio.run(verify_schema_integrity(_db_path(args)))
    failed = False
    for check in checks:
        extra = {k: v for k, v in check.items() if k not in ("check", "status")}
        print(f"  {check['check']:<16} {check['status']}  {extra}")
        failed = failed or check["status"] != "PASS"
    if failed:
        sys.exit(1)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start uvicorn."""
    import uvicorn

    print(f"Starting server on {args.host}:{args.port}...")
    uvicorn.run(
        "src.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


def cmd_template(args: argparse.Namespace) -> None:
    """Write the import template workbook."""
    from src.infrastructure.excel import WorkbookTemplateWriter

    out = Path(args.output)
    out.write_bytes(WorkbookTemplateWriter().template())
    print(f"Template written to {out}")


def cmd_export(args: argparse.Namespace) -> None:
    """Write the stock report from the database."""
    from src.application.use_cases import ExportInventoryUseCase
    from src.infrastructure.storage.sqlite import close_pool

    async def run() -> bytes:
        try:
            workbook = await ExportInventoryUseCase().execute()
        finally:
            await close_pool()
        return workbook.content

    out = Path(args.output)
    out.write_bytes(asyncio.run(run()))
    print(f"Stock report written to {out}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="StokTakip management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--db", help="Database file (default: from settings)")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.add_argument("--db", help="Database file (default: from settings)")
    p_status.set_defaults(func=cmd_status)

    # verify
    p_verify = sub.add_parser("verify", help="Check schema integrity")
    p_verify.add_argument("--db", help="Database file (default: from settings)")
    p_verify.set_defaults(func=cmd_verify)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p_serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # template
    p_template = sub.add_parser("template", help="Write the Excel import template")
    p_template.add_argument("output", help="Output .xlsx path")
    p_template.set_defaults(func=cmd_template)

    # export
    p_export = sub.add_parser("export", help="Export stock levels to Excel")
    p_export.add_argument("output", help="Output .xlsx path")
    p_export.set_defaults(func=cmd_export)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
