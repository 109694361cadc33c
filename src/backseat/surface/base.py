#!/usr/bin/env python3
"""
BACKSEAT EDITING SURFACE - Collaborator Contract
------------------------------------------------
The engine never touches buffer storage, cursor tracking or gutter drawing
directly. Everything it needs from the host editor goes through this
interface: line/position translation, marker primitives, the transient
message channel and change notification.

Author: Backseat Team
Date: 2026-10-19
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

# (marker, prior_position, direction)
CursorCallback = Callable[["Marker", int, Any], None]
# (start_offset, end_offset)
ChangeHook = Callable[[int, int], None]


@dataclass(eq=False)
class Marker:
    """
    The surface's rendering primitive. Treated as immutable once built:
    a new payload means a new marker.
    """
    start: int                              # First character offset of the span
    end: int                                # Offset of the end of the line (exclusive of newline)
    glyph: str                              # Left-margin glyph drawn for the span
    payload: Any = None                     # Opaque data handed back on cursor events
    on_cursor: Optional[CursorCallback] = field(default=None, repr=False)

    def covers(self, position: int) -> bool:
        return self.start <= position <= self.end


class EditingSurface(ABC):
    """Everything the annotation engine expects from a host text surface."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Identity of the document (used for logging and context keys)."""

    @property
    @abstractmethod
    def text(self) -> str:
        """Full current text."""

    @abstractmethod
    def line_count(self) -> int:
        """Number of lines currently in the document."""

    @abstractmethod
    def line_span(self, line: int) -> Tuple[int, int]:
        """Current (start, end) character offsets of a 1-based line."""

    @abstractmethod
    def add_marker(self, start: int, end: int, glyph: str, payload: Any = None,
                   on_cursor: Optional[CursorCallback] = None) -> Marker:
        """Creates and displays a marker over the span."""

    @abstractmethod
    def remove_marker(self, marker: Marker) -> None:
        """Removes a marker from display."""

    @abstractmethod
    def markers(self) -> List[Marker]:
        """Live markers, in creation order."""

    @abstractmethod
    def show_message(self, message: Any) -> None:
        """Surfaces a transient message to the user (echo area, status bar)."""

    @abstractmethod
    def add_change_hook(self, hook: ChangeHook) -> None:
        """Registers `hook(start, end)` for every change to this surface."""

    @abstractmethod
    def remove_change_hook(self, hook: ChangeHook) -> None:
        """Unregisters a hook added with add_change_hook."""
