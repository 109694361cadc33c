#!/usr/bin/env python3
"""
BACKSEAT TEXT BUFFER - In-Memory Editing Surface
------------------------------------------------
A plain-Python stand-in for a host editor buffer. Used by the replay CLI
and the test suite for both the annotated document and the chat log.

Like a real editor, placing or removing a marker counts as a change to the
buffer: change hooks fire for the marker's span even though the text itself
is untouched.

Author: Backseat Team
Date: 2026-10-19
"""

import logging
from typing import Any, List, Optional, Tuple

from backseat.core.errors import OutOfRangeLine
from backseat.core.models import Direction
from backseat.surface.base import ChangeHook, CursorCallback, EditingSurface, Marker

logger = logging.getLogger("backseat.buffer")


class TextBuffer(EditingSurface):
    """
    Holds text, a cursor position, live markers and the messages shown to
    the user. Lines are 1-based and separated by '\\n'.
    """

    def __init__(self, name: str, text: str = ""):
        self._name = name
        self._text = text.replace('\r\n', '\n')
        self._markers: List[Marker] = []
        self._hooks: List[ChangeHook] = []
        self.point = 0
        self.messages: List[Any] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def text(self) -> str:
        return self._text

    # --- Line / position translation ---

    def line_count(self) -> int:
        return self._text.count('\n') + 1

    def line_span(self, line: int) -> Tuple[int, int]:
        """
        Resolves a line to its current offsets with a single forward scan.
        """
        if line < 1:
            raise OutOfRangeLine(line, self.line_count())

        start = 0
        for _ in range(line - 1):
            newline = self._text.find('\n', start)
            if newline == -1:
                raise OutOfRangeLine(line, self.line_count())
            start = newline + 1

        end = self._text.find('\n', start)
        if end == -1:
            end = len(self._text)
        return start, end

    def line_at(self, position: int) -> int:
        return self._text.count('\n', 0, position) + 1

    def line_text(self, line: int) -> str:
        start, end = self.line_span(line)
        return self._text[start:end]

    # --- Editing ---

    def insert(self, text: str, position: Optional[int] = None) -> Tuple[int, int]:
        """
        Inserts text (appends by default) and notifies change hooks with the
        inserted range. Markers after the insertion point shift with the text.
        """
        text = text.replace('\r\n', '\n')
        if position is None:
            position = len(self._text)
        position = max(0, min(position, len(self._text)))

        self._text = self._text[:position] + text + self._text[position:]
        for marker in self._markers:
            if marker.start >= position:
                marker.start += len(text)
                marker.end += len(text)
            elif marker.end >= position:
                marker.end += len(text)
        if self.point >= position:
            self.point += len(text)

        start, end = position, position + len(text)
        self._run_hooks(start, end)
        return start, end

    # --- Markers ---

    def add_marker(self, start: int, end: int, glyph: str, payload: Any = None,
                   on_cursor: Optional[CursorCallback] = None) -> Marker:
        marker = Marker(start=start, end=end, glyph=glyph, payload=payload, on_cursor=on_cursor)
        self._markers.append(marker)
        self._run_hooks(start, end)
        return marker

    def remove_marker(self, marker: Marker) -> None:
        if marker not in self._markers:
            return
        self._markers.remove(marker)
        self._run_hooks(marker.start, marker.end)

    def markers(self) -> List[Marker]:
        return list(self._markers)

    def markers_at(self, position: int) -> List[Marker]:
        return [m for m in self._markers if m.covers(position)]

    # --- Cursor ---

    def move_cursor(self, position: int) -> None:
        """
        Moves point and reports sensor transitions: markers left first,
        then markers entered.
        """
        position = max(0, min(position, len(self._text)))
        prior = self.point
        before = self.markers_at(prior)
        self.point = position
        after = self.markers_at(position)

        for marker in before:
            if marker not in after and marker.on_cursor:
                marker.on_cursor(marker, prior, Direction.LEFT)
        for marker in after:
            if marker not in before and marker.on_cursor:
                marker.on_cursor(marker, prior, Direction.ENTERED)

    def goto_line(self, line: int) -> None:
        start, _ = self.line_span(line)
        self.move_cursor(start)

    # --- Messages & hooks ---

    def show_message(self, message: Any) -> None:
        logger.debug(f"[{self._name}] message: {message}")
        self.messages.append(message)

    def add_change_hook(self, hook: ChangeHook) -> None:
        if hook not in self._hooks:
            self._hooks.append(hook)

    def remove_change_hook(self, hook: ChangeHook) -> None:
        if hook in self._hooks:
            self._hooks.remove(hook)

    def _run_hooks(self, start: int, end: int) -> None:
        for hook in list(self._hooks):
            hook(start, end)
