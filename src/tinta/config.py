"""ContextVar-based segmentation configuration for tinta.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per Segmenter and read by the segment builder.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Through the Segmenter class
    segmenter = Segmenter(grammars, config=SegmentConfig(merge_adjacent=False))
    doc = segmenter(source, "c")

    # Direct builder usage (advanced)
    from tinta.config import set_segment_config, reset_segment_config, SegmentConfig

    set_segment_config(SegmentConfig(strict=True))
    try:
        doc = SegmentBuilder(source, grammar).build()
    finally:
        reset_segment_config()

    # Or use the context manager
    with segment_config_context(SegmentConfig(strict=True)):
        doc = SegmentBuilder(source, grammar).build()

"""

from collections.abc import Callable
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class SegmentConfig:
    """Immutable segmentation configuration.

    Note: grammar and source_file are per-call state, not configuration.

    Attributes:
        merge_adjacent: Merge consecutive documentation comments into one
            Documentation segment when only whitespace separates them
        merge_newlines: Most newlines a separating whitespace run may hold
            and still merge (1 = adjacent lines; a blank line breaks the run)
        strip_decoration: Strip continuation decoration (e.g. leading ``*``)
            from block comment lines
        strict: Raise UnterminatedConstructError instead of recovering
        text_transformer: Optional callback applied to documentation text

    """

    merge_adjacent: bool = True
    merge_newlines: int = 1
    strip_decoration: bool = True
    strict: bool = False
    text_transformer: Callable[[str], str] | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "SegmentConfig":
        """Create SegmentConfig from dictionary.

        Only includes keys that are valid SegmentConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = SegmentConfig.from_dict({
            ...     "merge_newlines": 2,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.merge_newlines
            2

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: SegmentConfig = SegmentConfig()

_segment_config: ContextVar[SegmentConfig] = ContextVar(
    "segment_config",
    default=_DEFAULT_CONFIG,
)


def get_segment_config() -> SegmentConfig:
    """Get current segmentation configuration (thread-local)."""
    return _segment_config.get()


def set_segment_config(config: SegmentConfig) -> None:
    """Set segmentation configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _segment_config.set(config)


def reset_segment_config() -> None:
    """Reset to default configuration."""
    _segment_config.set(_DEFAULT_CONFIG)


@contextmanager
def segment_config_context(config: SegmentConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with segment_config_context(SegmentConfig(merge_adjacent=False)):
        ...     doc = segment(source, "c", grammars)
        >>> # Automatically reset to previous config

    """
    previous = _segment_config.get()
    _segment_config.set(config)
    try:
        yield
    finally:
        _segment_config.set(previous)


__all__ = [
    "SegmentConfig",
    "get_segment_config",
    "reset_segment_config",
    "segment_config_context",
    "set_segment_config",
]
