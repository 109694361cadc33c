#!/usr/bin/env python3
"""
BACKSEAT STORE - The Line Ledger
--------------------------------
Maps line numbers of the target document to their accumulated comments.
Every write goes through the IndicatorManager first so that a line has a
store entry exactly when it has a live marker.

Author: Backseat Team
Date: 2026-10-19
"""

import logging
from typing import Dict, List, Optional

from backseat.annotation.indicators import IndicatorManager
from backseat.core.models import Comment, LineAnnotations

logger = logging.getLogger("backseat.store")


class AnnotationStore:
    """
    line number -> LineAnnotations, for exactly one document.
    """

    def __init__(self, indicators: IndicatorManager):
        self.indicators = indicators
        self._lines: Dict[int, LineAnnotations] = {}

    def upsert(self, line: int, comment: Comment) -> LineAnnotations:
        """
        Adds `comment` to `line`, newest first, and rebuilds the line's marker.
        A comment already present is a no-op and returns the current list.

        OutOfRangeLine from the marker rebuild propagates; the ledger is
        only written once the new marker exists.
        """
        existing = self._lines.get(line)

        if existing is None:
            updated = LineAnnotations((comment,))
        elif comment in existing:
            logger.debug(f"Duplicate comment from {comment.author} on line {line} ignored")
            return existing
        else:
            updated = existing.prepend(comment)

        self.indicators.refresh(line, updated)
        self._lines[line] = updated

        logger.info(f"Line {line}: {comment.author} commented ({len(updated)} total)")
        return updated

    def clear(self, line: int) -> None:
        self._lines.pop(line, None)
        self.indicators.destroy(line)

    def clear_all(self) -> None:
        removed = self.indicators.destroy_all()
        self._lines.clear()
        logger.info(f"Cleared all annotations ({removed} indicator(s) removed)")

    def get(self, line: int) -> Optional[LineAnnotations]:
        return self._lines.get(line)

    def lines(self) -> List[int]:
        return sorted(self._lines)

    def __contains__(self, line: object) -> bool:
        return line in self._lines

    def __len__(self) -> int:
        return len(self._lines)
