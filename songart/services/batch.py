"""
Batch renderer.

Walks the catalog in order and renders every entry, with a bounded number of
jobs in flight and a short pause before each one. A failing entry is logged
and skipped; the batch always runs to the end (or until cancelled).
"""
from __future__ import annotations

import functools
import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from songart.domain.errors import RenderCancelled
from songart.domain.models import (
    BatchReport,
    CatalogEntry,
    JobStatus,
    RenderJob,
    RenderResult,
)
from songart.services.assets import AssetLibrary, FileSystemAssets
from songart.services.background import BackgroundProvider, hue_for_date, resolve_background
from songart.services.compositor import render_composite
from songart.services.layer_resolver import build_layer_spec
from songart.services.output_writer import write_artifacts
from songart.settings import Settings
from songart.storage.file_storage import OutputStorage

logger = logging.getLogger(__name__)


class BatchRenderer:
    """
    Render portraits for a sequence of catalog entries.

    Args:
        assets: Layer asset library
        storage: Where the artwork goes
        concurrency: Maximum number of jobs rendering at once
        delay_seconds: Pause before each job is started
        job_timeout: Seconds a single job may spend compositing (None = no limit)
        strict_assets: Fail a job at resolution time when a layer file is missing
        background_provider: date -> BackgroundSpec (or descriptor string)
    """

    def __init__(
        self,
        assets: AssetLibrary,
        storage: OutputStorage,
        concurrency: int = 1,
        delay_seconds: float = 0.1,
        job_timeout: Optional[float] = None,
        strict_assets: bool = False,
        background_provider: Optional[BackgroundProvider] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.assets = assets
        self.storage = storage
        self.concurrency = concurrency
        self.delay_seconds = max(0.0, delay_seconds)
        self.job_timeout = job_timeout
        self.strict_assets = strict_assets
        self.background_provider = background_provider or hue_for_date
        self._sleep = sleep
        self._cancelled = threading.Event()

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "BatchRenderer":
        backgrounds = FileSystemAssets(settings.BACKGROUNDS_DIR)
        kwargs = {
            "assets": FileSystemAssets(settings.LAYERS_DIR),
            "storage": OutputStorage(settings.OUTPUT_DIR),
            "concurrency": settings.CONCURRENCY,
            "delay_seconds": settings.JOB_DELAY_SECONDS,
            "job_timeout": settings.JOB_TIMEOUT_SECONDS,
            "strict_assets": settings.STRICT_ASSETS,
            "background_provider": functools.partial(hue_for_date, backgrounds=backgrounds),
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    def cancel(self) -> None:
        """Stop submitting jobs; running jobs stop at their next layer."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def build_job(self, entry: CatalogEntry) -> RenderJob:
        output_path = self.storage.image_path(entry)
        layers = build_layer_spec(entry, self.assets, strict=self.strict_assets)
        background = resolve_background(entry.date, self.background_provider)
        return RenderJob(entry=entry, layers=layers, background=background, output_path=output_path)

    def _stop_check(self) -> Callable[[], bool]:
        deadline = None
        if self.job_timeout is not None:
            deadline = time.monotonic() + self.job_timeout

        def should_stop() -> bool:
            if self._cancelled.is_set():
                return True
            return deadline is not None and time.monotonic() > deadline

        return should_stop

    def render_entry(self, entry: CatalogEntry) -> RenderResult:
        """Render one entry. Never raises; failures come back as a FAILED result."""
        output_path: Optional[Path] = None
        result = RenderResult(number=entry.number, title=entry.title, status=JobStatus.FAILED)
        try:
            output_path = self.storage.image_path(entry)
            result.output_path = output_path
            job = self.build_job(entry)
            image = render_composite(job.background, job.layers, should_stop=self._stop_check())
            result.image_path, result.thumbnail_path = write_artifacts(image, job.output_path)
            result.status = JobStatus.SUCCEEDED
        except RenderCancelled as exc:
            if self._cancelled.is_set():
                result.status = JobStatus.CANCELLED
                logger.warning("[batch] cancelled %s (%s)", output_path, exc)
            else:
                logger.error("[batch] %s timed out after %ss (%s)", output_path, self.job_timeout, exc)
            result.error = str(exc)
        except Exception as exc:
            logger.exception("[batch] failed to render %s", output_path)
            result.error = str(exc)
        return result

    def run(self, entries: Iterable[CatalogEntry]) -> BatchReport:
        """
        Render every entry in collection order.

        No more than `concurrency` jobs run at once; with a ceiling above one,
        only submission order is guaranteed. Results are reported in
        submission order.
        """
        entries = list(entries)
        report = BatchReport()
        if not entries:
            return report

        try:
            self.storage.ensure_root()
        except OSError:
            # each job still runs and fails on its own write
            logger.exception("[batch] could not create output directory %s", self.storage.output_root)
        for entry in entries:
            self.storage.claim(entry)
        logger.info(
            "[batch] rendering %s entries into %s (concurrency=%s, delay=%ss)",
            len(entries),
            self.storage.output_root,
            self.concurrency,
            self.delay_seconds,
        )

        slots = threading.BoundedSemaphore(self.concurrency)
        submitted: List[Tuple[CatalogEntry, Future]] = []
        with ThreadPoolExecutor(max_workers=self.concurrency, thread_name_prefix="songart-render") as pool:
            for entry in entries:
                slots.acquire()
                if self._cancelled.is_set():
                    slots.release()
                    break
                if self.delay_seconds:
                    self._sleep(self.delay_seconds)
                future = pool.submit(self.render_entry, entry)
                future.add_done_callback(lambda _f: slots.release())
                submitted.append((entry, future))

        for _entry, future in submitted:
            report.results.append(future.result())
        for entry in entries[len(submitted):]:
            report.results.append(
                RenderResult(
                    number=entry.number,
                    title=entry.title,
                    status=JobStatus.CANCELLED,
                    output_path=self.storage.image_path(entry),
                    error="batch cancelled before the job started",
                )
            )

        logger.info(
            "[batch] done: %s succeeded, %s failed, %s cancelled (of %s)",
            report.succeeded,
            report.failed,
            report.cancelled,
            report.attempted,
        )
        for result in report.results:
            if result.status == JobStatus.FAILED:
                logger.info("[batch]   failed: #%s %s -> %s", result.number, result.title, result.output_path)
        return report
