"""Command-line interface for the Simple Users API."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Awaitable, Callable, Sequence

from simple_api.config import Settings, get_settings
from simple_api.core.errors import StorageUnavailableError
from simple_api.core.repository_protocols import UserRepository
from simple_api.infrastructure.database import build_user_repository
from simple_api.infrastructure.observability import setup_logging
from simple_api.services.seed_users import (
    clear_users, count_users, reseed_users, seed_users,
)

logger = logging.getLogger("simple_api.cli")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simple Users API utilities")
    subparsers = parser.add_subparsers(dest="command")
    parser.set_defaults(command="serve", host=None, port=None)

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: $HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: $PORT)")

    subparsers.add_parser("seed", help="Insert mock users into an empty collection")
    subparsers.add_parser("clear", help="Delete every user")
    subparsers.add_parser("count", help="Print the number of stored users")
    subparsers.add_parser("reseed", help="Clear the collection, then seed it")

    return parser.parse_args(argv)


def _serve(settings: Settings, host: str | None, port: int | None) -> int:
    import uvicorn

    from simple_api.main import create_app

    host = host or settings.host
    port = port or settings.port
    logger.info("Starting Simple Users API on http://%s:%s", host, port)
    uvicorn.run(create_app(settings), host=host, port=port, log_level="info")
    return 0


async def _run_admin(
    settings: Settings,
    action: Callable[[UserRepository], Awaitable[int]],
) -> int:
    repository, manager = build_user_repository(settings)
    try:
        return await action(repository)
    finally:
        if manager is not None:
            await manager.close()


_ADMIN_MESSAGES = {
    "seed": ("Seeding database with mock user data...", "Seeded {} users", seed_users),
    "clear": ("Clearing all users from database...", "Deleted {} users", clear_users),
    "count": (None, "Current user count: {}", count_users),
    "reseed": ("Reseeding database with fresh data...", "Reseeded {} users", reseed_users),
}


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    if args.command == "serve":
        return _serve(settings, args.host, args.port)

    intro, outro, action = _ADMIN_MESSAGES[args.command]
    if intro:
        print(intro)
    try:
        result = asyncio.run(_run_admin(settings, action))
    except StorageUnavailableError as exc:
        print(f"Error: {exc.message} ({exc.operation})", file=sys.stderr)
        return 1
    print(outro.format(result))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
