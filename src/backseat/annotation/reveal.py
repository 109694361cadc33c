#!/usr/bin/env python3
"""
BACKSEAT REVEAL - Cursor-Triggered Comment Display
--------------------------------------------------
When the cursor lands on an annotated line, the comments riding on that
line's marker are shown in the surface's message area:

    bob - nah, use a tree; alice - use a hashmap here

Author names carry a highlight style so they stand out from the text.

Author: Backseat Team
Date: 2026-10-19
"""

import logging
from typing import Optional

from rich.text import Text

from backseat.core.models import Direction, Indicator, LineAnnotations
from backseat.surface.base import EditingSurface

logger = logging.getLogger("backseat.reveal")


class RevealController:
    """
    Formats an indicator's payload and surfaces it on cursor entry.
    """

    def __init__(self, surface: EditingSurface, author_style: str = "bold magenta",
                 separator: str = "; "):
        self.surface = surface
        self.author_style = author_style
        self.separator = separator

    def format(self, annotations: LineAnnotations) -> Text:
        """Builds `author - text` entries in list order; `.plain` holds the bare string."""
        rendered = Text()
        for i, comment in enumerate(annotations):
            if i > 0:
                rendered.append(self.separator)
            rendered.append(comment.author, style=self.author_style)
            rendered.append(f" - {comment.text}")
        return rendered

    def on_cursor_transition(self, indicator: Indicator, direction: Direction) -> Optional[Text]:
        if direction is not Direction.ENTERED:
            return None

        message = self.format(indicator.annotations)
        logger.debug(f"Revealing line {indicator.line}: {message.plain}")
        self.surface.show_message(message)
        return message
