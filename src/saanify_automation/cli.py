"""Command-line entry point for running automation tasks."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

from saanify_automation.db import create_db_and_tables
from saanify_automation.services import build_automation_service
from saanify_automation.settings import settings

logger = logging.getLogger(__name__)


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _run(task_id: str) -> int:
    service = build_automation_service(settings)
    result = asyncio.run(service.run(task_id))
    _print_json(result.to_dict())
    return 0 if result.success else 1


def _status() -> int:
    service = build_automation_service(settings)
    snapshot = asyncio.run(service.get_status())
    _print_json(snapshot.model_dump(mode="json", by_alias=True))
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Saanify automation tasks.")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("serve", help="start the HTTP API")
    run_parser = subparsers.add_parser("run", help="run one task and print its result")
    run_parser.add_argument("task_id")
    subparsers.add_parser("status", help="print the task status snapshot")
    subparsers.add_parser("init-db", help="create the local datastore tables")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())

    if args.command == "serve":
        from saanify_automation.api import main as serve

        serve()
        return

    create_db_and_tables()
    if args.command == "init-db":
        logger.info("local datastore ready: %s", settings.database_url)
        raise SystemExit(0)
    if args.command == "run":
        raise SystemExit(_run(args.task_id))
    raise SystemExit(_status())


if __name__ == "__main__":
    main()
