"""Command line entrypoint for the closet harmony service."""

import argparse
import json
from typing import List, Optional

from closet_app.app import ClosetApp
from closet_app.logging_config import get_logger, operation_context

LOGGER = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Closet color harmony")
    subparsers = parser.add_subparsers(dest="command", required=True)

    recommend = subparsers.add_parser("recommend", help="Print color suggestions for an item")
    recommend.add_argument("--user", required=True, help="Owner of the closet")
    recommend.add_argument("--item", required=True, help="Base item id")

    closet = subparsers.add_parser("list", help="List closet items")
    closet.add_argument("--user", required=True, help="Owner of the closet")
    closet.add_argument("--category", default=None, help="top, bottom, shoe or all")

    subparsers.add_parser("serve", help="Run the HTTP API")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.command == "serve":
        import uvicorn

        from server.api import create_app

        closet_app = ClosetApp()
        uvicorn.run(create_app(closet_app), host=closet_app.config.host, port=closet_app.config.port)
        return 0

    closet_app = ClosetApp()
    with operation_context(f"cli_{args.command}", logger=LOGGER):
        if args.command == "recommend":
            result = closet_app.tools.recommend_for_item(user_id=args.user, item_id=args.item)
            print(json.dumps(result, indent=2))
            return 0 if result.get("status") == "ok" else 1

        items = closet_app.tools.filter_items(user_id=args.user, category=args.category)
    print(json.dumps(items, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
