"""Batch segmentation of many source files.

Runs one SegmentBuilder per job on a thread pool. Jobs are independent:
a failure in one (unknown language, unreadable file, strict-mode
unterminated construct) is recorded on its BatchResult and never aborts
the others.

ContextVars are not inherited by pool threads, so the caller's
SegmentConfig is captured once and set inside every worker.

Example:
    >>> grammars = load_bundled_grammars()
    >>> results = segment_many(jobs_from_paths(["a.c", "b.js"], grammars), grammars)
    >>> [r.ok for r in results]
    [True, True]

"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from tinta.builder import SegmentBuilder
from tinta.config import SegmentConfig, get_segment_config, segment_config_context
from tinta.errors import ConfigurationError, TintaError
from tinta.grammar.table import GrammarTable
from tinta.nodes import Document
from tinta.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SourceJob:
    """One source text to segment.

    Attributes:
        name: Label for results and locations (usually the file path)
        text: Source text; None means read ``name`` from disk in the worker
        language: Language name or alias; None means look up by extension
    """

    name: str
    text: str | None = None
    language: str | None = None


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Outcome of one job: a Document or the error that prevented it."""

    name: str
    document: Document | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """True if the job produced a Document."""
        return self.error is None


def jobs_from_paths(
    paths: Iterable[str | PathLike[str]], grammars: GrammarTable
) -> list[SourceJob]:
    """Create jobs for files, choosing each language by extension.

    Files are read lazily by the worker. A path whose extension no grammar
    claims still becomes a job; its result carries the ConfigurationError.
    """
    jobs: list[SourceJob] = []
    for path in paths:
        language: str | None
        try:
            language = grammars.for_path(path).name
        except ConfigurationError:
            language = None
        jobs.append(SourceJob(name=str(path), language=language))
    return jobs


def segment_many(
    jobs: Sequence[SourceJob],
    grammars: GrammarTable,
    *,
    config: SegmentConfig | None = None,
    max_workers: int | None = None,
) -> list[BatchResult]:
    """Segment many sources concurrently.

    Args:
        jobs: Sources to segment
        grammars: Grammar table shared by all jobs (immutable)
        config: Configuration for every job (defaults to the caller's current)
        max_workers: Thread pool size (ThreadPoolExecutor default if None)

    Returns:
        One BatchResult per job, in job order
    """
    if not jobs:
        return []

    effective = config if config is not None else get_segment_config()

    def run(job: SourceJob) -> BatchResult:
        with segment_config_context(effective):
            return _run_job(job, grammars)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(run, jobs))

    failed = sum(1 for r in results if not r.ok)
    logger.debug("Segmented %d sources, %d failed", len(results), failed)
    return results


def _run_job(job: SourceJob, grammars: GrammarTable) -> BatchResult:
    try:
        text = job.text
        if text is None:
            text = Path(job.name).read_text(encoding="utf-8")
        if job.language is None:
            grammar = grammars.for_path(job.name)
        else:
            grammar = grammars.get(job.language)
        document = SegmentBuilder(text, grammar, source_file=job.name).build()
    except (TintaError, OSError, UnicodeDecodeError) as e:
        logger.warning("Skipping %s: %s", job.name, e)
        return BatchResult(name=job.name, error=e)
    return BatchResult(name=job.name, document=document)
