"""Opener classification for code mode."""

from __future__ import annotations

from tinta.grammar.table import BlockCommentStyle, Grammar, Opener
from tinta.spans import SpanKind


class OpenerClassifierMixin:
    """Mixin deciding which opener, if any, starts at a position.

    Pure logic: never moves the scanner position.

    """

    _source: str
    _grammar: Grammar

    def _match_opener(self, pos: int) -> Opener | None:
        """Return the highest-priority opener matching at ``pos``.

        Candidates come from the grammar in priority order (longest marker
        first). A block start such as ``/**`` that is immediately closed
        (``/**/``) is an empty comment of a less specific style, so it only
        wins when nothing else matches.

        Args:
            pos: Absolute position in source

        Returns:
            Matching Opener or None
        """
        source = self._source
        fallback: Opener | None = None

        for opener in self._grammar.openers_for(source[pos]):
            if not source.startswith(opener.marker, pos):
                continue
            if opener.kind is SpanKind.BLOCK_COMMENT and self._closes_immediately(
                opener.style, pos  # type: ignore[arg-type]
            ):
                if fallback is None:
                    fallback = opener
                continue
            return opener

        return fallback

    def _closes_immediately(self, style: BlockCommentStyle, pos: int) -> bool:
        """Check if the start marker's last char also begins the end marker.

        Only styles that refine a shorter block style (``/**`` over ``/*``)
        qualify; a plain ``/*/`` still opens a comment.
        """
        start, end = style.start, style.end
        if start[-1] != end[0]:
            return False
        refines = any(
            other.start != start and start.startswith(other.start)
            for other in self._grammar.block_comments
        )
        return refines and self._source.startswith(start[:-1] + end, pos)
