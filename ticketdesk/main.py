#!/usr/bin/env python3
"""
TicketDesk - headless list viewer
Prints one page of a record list using the same paging core as the UI.
"""

import argparse
import logging
import sys
from typing import List, Optional

from ticketdesk.core.di_container import LIST_KINDS, AppContainer
from ticketdesk.core.errors import FetchError

logger = logging.getLogger("TicketDesk.Main")


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point"""
    parser = argparse.ArgumentParser(prog="ticketdesk")
    parser.add_argument("kind", choices=sorted(LIST_KINDS), help="Record list to show")
    parser.add_argument("--page", type=int, default=1, help="Page number (1-based)")
    parser.add_argument("--page-size", type=int, help="Page size (one of the configured options)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    container = AppContainer.create()
    session = container.create_list_session(args.kind)
    controller = session.controller

    failures: List[FetchError] = []
    session.loader.load_failed.connect(failures.append)
    session.loader.query_all()
    if args.page_size is not None and not controller.set_page_size(args.page_size):
        logger.warning(
            f"Page size {args.page_size} not in {controller.page_size_options}, "
            f"keeping {controller.page_size}"
        )
    if args.page != controller.current_page and not controller.go_to_page(args.page):
        logger.warning(f"Page {args.page} is out of range, showing page {controller.current_page}")

    if failures:
        for error in failures:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    for record in session.items:
        print(record)
    print(controller.status_text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
