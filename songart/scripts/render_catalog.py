"""Render portrait artwork for every song in a catalog export.

Usage:
    python -m songart.scripts.render_catalog --catalog songs.json [--layers-dir DIR] [--out DIR] [--number 364]

Every song gets `<slug>.png` and `<slug>_small.png` in the output directory.
Failures are logged per song; the run always continues to the next one.
Exit status is 0 when every song rendered, 1 when some failed, 2 when the
catalog itself could not be read.
"""

from __future__ import annotations

import argparse
import functools
import logging
import signal
from typing import List, Optional

from songart.domain.errors import CatalogError
from songart.domain.models import CatalogEntry
from songart.services.assets import FileSystemAssets
from songart.services.background import hue_for_date
from songart.services.batch import BatchRenderer
from songart.services.catalog import load_catalog
from songart.settings import settings
from songart.storage.file_storage import OutputStorage

logger = logging.getLogger("render_catalog")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render song portraits from a catalog export.")
    parser.add_argument("--catalog", required=True, help="JSON array of populated song records.")
    parser.add_argument("--layers-dir", default=str(settings.LAYERS_DIR), help="Directory of layer PNGs.")
    parser.add_argument("--backgrounds-dir", default=str(settings.BACKGROUNDS_DIR), help="Directory of <YYYY-MM-DD>.png backgrounds.")
    parser.add_argument("--out", default=str(settings.OUTPUT_DIR), help="Output directory for this run.")
    parser.add_argument("--number", type=int, default=None, help="Only render the song with this number.")
    parser.add_argument("--concurrency", type=int, default=settings.CONCURRENCY)
    parser.add_argument("--delay-ms", type=float, default=settings.JOB_DELAY_SECONDS * 1000.0)
    parser.add_argument("--timeout", type=float, default=settings.JOB_TIMEOUT_SECONDS, help="Per-song timeout in seconds.")
    parser.add_argument("--strict-assets", action=argparse.BooleanOptionalAction, default=settings.STRICT_ASSETS, help="Fail a song up front when a layer file is missing.")
    return parser


def _select(entries: List[CatalogEntry], number: Optional[int]) -> List[CatalogEntry]:
    if number is None:
        return entries
    return [e for e in entries if e.number == number]


def main(argv: Optional[list[str]] = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.LOG_LEVEL, format="%(message)s")
    args = build_parser().parse_args(argv)

    try:
        entries = load_catalog(args.catalog)
    except CatalogError:
        logger.exception("Could not load catalog %s", args.catalog)
        return 2

    entries = _select(entries, args.number)
    if not entries:
        logger.warning("Nothing to render (number=%s)", args.number)
        return 0

    renderer = BatchRenderer.from_settings(
        settings,
        assets=FileSystemAssets(args.layers_dir),
        storage=OutputStorage(args.out),
        background_provider=functools.partial(hue_for_date, backgrounds=FileSystemAssets(args.backgrounds_dir)),
        concurrency=args.concurrency,
        delay_seconds=args.delay_ms / 1000.0,
        job_timeout=args.timeout,
        strict_assets=args.strict_assets,
    )

    previous = signal.getsignal(signal.SIGINT)

    def _on_interrupt(signum, frame):
        logger.warning("Interrupted; finishing in-flight songs and stopping")
        renderer.cancel()

    signal.signal(signal.SIGINT, _on_interrupt)
    try:
        report = renderer.run(entries)
    finally:
        signal.signal(signal.SIGINT, previous)

    logger.info("Rendered %s/%s songs into %s", report.succeeded, report.attempted, args.out)
    return 0 if report.failed == 0 and report.cancelled == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
