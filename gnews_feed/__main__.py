from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from .config import load_settings
from .core import NewsService
from .display import format_item
from .exceptions import ConfigError
from .log import setup_logging
from .sources import CATEGORIES


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="gnews_feed", description="Print Google News headlines.")
    parser.add_argument("-c", "--category", default="", help=f"one of: {', '.join(CATEGORIES)} (default: top stories)")
    parser.add_argument("-n", "--limit", type=int, default=None, help="number of items to print")
    parser.add_argument("--json", action="store_true", help="print the raw JSON payload")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    setup_logging(settings.log_level)
    service = NewsService(settings=settings)
    data = service.handle(args.category)

    if args.json:
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return 1 if "error" in data else 0

    if "error" in data:
        print(f"{data['error']}: {data['message']}", file=sys.stderr)
        return 1

    items = data["items"]
    if args.limit is not None:
        items = items[: max(0, args.limit)]
    if not items:
        print("No news available.")
        return 0

    print(f"{data['title']} [{data['category']}]\n")
    for item in items:
        print(format_item(item))
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
