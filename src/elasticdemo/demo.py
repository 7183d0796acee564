"""Command-line entry point for the demo workflow.

Run with:
  - elasticdemo [--files N] [--items N] [--wait]
  - or: python -m elasticdemo.demo
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from elasticdemo.config import Settings, load_settings
from elasticdemo.exceptions import ElasticDemoError
from elasticdemo.log import configure_logging
from elasticdemo.search.store import DocumentStore
from elasticdemo.workflow import DemoReport, run_demo

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="elasticdemo",
        description="Index synthetic documents, search them and update a few.",
    )
    parser.add_argument("--files", type=int, default=None, help="number of file records to write")
    parser.add_argument("--items", type=int, default=None, help="number of catalog items to write")
    parser.add_argument("--wait", action="store_true", help="wait for ENTER before exiting")
    return parser


async def _run(settings: Settings) -> DemoReport:
    async with DocumentStore.from_config(settings.elasticsearch) as store:
        await store.ping()
        return await run_demo(store, settings)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ElasticDemoError as exc:
        configure_logging()
        logger.error(str(exc))
        return 1
    configure_logging(settings.app.log_level, stream=sys.stdout)
    if args.files is not None:
        settings.demo.file_count = max(1, args.files)
    if args.items is not None:
        settings.demo.catalog_count = max(1, args.items)

    try:
        report = asyncio.run(_run(settings))
    except ElasticDemoError as exc:
        logger.error(f"Demo aborted: {exc}")
        return 1

    logger.info(
        f"Done: {report.files_written} file(s) in {report.file_index}, "
        f"{report.items_written} item(s) in {report.catalog_index}, "
        f"scripted update modified {report.updated_by_query}, "
        f"point update {report.replace_outcome.value if report.replace_outcome else 'n/a'}"
    )
    if args.wait:
        input("Press ENTER to exit: ")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
