#!/usr/bin/env python3
"""
BACKSEAT CORE MODELS
--------------------
Defines the fundamental data structures used across the Backseat engine.
Commands and comments are immutable records; an Indicator pairs a surface
marker with the annotation snapshot it was built from.

Author: Backseat Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Tuple


@dataclass(frozen=True)
class AnnotationCommand:
    """
    The transient result of parsing one chat line.
    Consumed once by the AnnotationStore and never retained.
    """
    author: str             # Nick found between the angle brackets
    line: int               # Target line number (1-based, not range checked)
    comment: str            # Remainder of the chat line, stamp removed


@dataclass(frozen=True)
class Comment:
    """
    The persisted unit of an annotation.
    Two comments with the same author and text are the same comment.
    """
    author: str
    text: str


@dataclass(frozen=True)
class LineAnnotations:
    """
    Ordered, duplicate-free comments for a single line. Newest first.
    """
    comments: Tuple[Comment, ...] = ()

    def prepend(self, comment: Comment) -> "LineAnnotations":
        """Returns a new snapshot with `comment` in front."""
        return LineAnnotations((comment,) + self.comments)

    def __contains__(self, comment: object) -> bool:
        return comment in self.comments

    def __iter__(self) -> Iterator[Comment]:
        return iter(self.comments)

    def __len__(self) -> int:
        return len(self.comments)


class Direction(Enum):
    """Cursor transition reported by the editing surface."""
    ENTERED = "entered"
    LEFT = "left"


@dataclass
class Indicator:
    """
    A gutter marker bound to one line of the target document.

    The payload is fixed at creation time. When the comments for the line
    change, the IndicatorManager destroys this object and builds a new one.
    """
    line: int                       # Line the marker was created for
    annotations: LineAnnotations    # Snapshot carried as the marker payload
    marker: Any = field(default=None, repr=False)  # Surface handle
