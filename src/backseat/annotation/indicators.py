#!/usr/bin/env python3
"""
BACKSEAT INDICATORS - Gutter Marker Ownership
---------------------------------------------
Owns exactly one Indicator per annotated line. Markers are never mutated:
every change of a line's comments replaces its marker wholesale.

Author: Backseat Team
Date: 2026-10-19
"""

import logging
from typing import Dict, List, Optional

from backseat.core.errors import OutOfRangeLine
from backseat.core.models import Direction, Indicator, LineAnnotations
from backseat.surface.base import EditingSurface, Marker

logger = logging.getLogger("backseat.indicators")

DEFAULT_GLYPH = "▶"


class IndicatorManager:
    """
    Creates, replaces and destroys the markers for one document.
    Cursor transitions on any marker are forwarded to the RevealController.
    """

    def __init__(self, surface: EditingSurface, reveal=None, glyph: str = DEFAULT_GLYPH):
        self.surface = surface
        self.reveal = reveal
        self.glyph = glyph
        self._indicators: Dict[int, Indicator] = {}

    def refresh(self, line: int, annotations: LineAnnotations) -> Indicator:
        """
        Replaces the indicator for `line` with one carrying `annotations`.
        Raises OutOfRangeLine before touching anything when the line is gone.
        """
        line_count = self.surface.line_count()
        if not 1 <= line <= line_count:
            raise OutOfRangeLine(line, line_count)

        # Spans move as the line is edited, so resolve them on every refresh
        start, end = self.surface.line_span(line)
        indicator = Indicator(line=line, annotations=annotations)
        indicator.marker = self.surface.add_marker(
            start, end,
            glyph=self.glyph,
            payload=annotations,
            on_cursor=self._sensor(indicator)
        )

        # The old marker goes only once its replacement exists
        self.destroy(line)
        self._indicators[line] = indicator

        logger.debug(f"Indicator for line {line} built with {len(annotations)} comment(s)")
        return indicator

    def destroy(self, line: int) -> bool:
        indicator = self._indicators.pop(line, None)
        if indicator is None:
            return False
        self.surface.remove_marker(indicator.marker)
        return True

    def destroy_all(self) -> int:
        count = 0
        for line in list(self._indicators):
            if self.destroy(line):
                count += 1
        return count

    def get(self, line: int) -> Optional[Indicator]:
        return self._indicators.get(line)

    def lines(self) -> List[int]:
        return sorted(self._indicators)

    def __len__(self) -> int:
        return len(self._indicators)

    def _sensor(self, indicator: Indicator):
        def on_cursor(marker: Marker, prior_position: int, direction: Direction) -> None:
            if self.reveal is not None:
                self.reveal.on_cursor_transition(indicator, direction)
        return on_cursor
