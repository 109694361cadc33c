#!/usr/bin/env python3
"""
BACKSEAT PARSER - Chat Command Extraction
-----------------------------------------
Turns one raw chat line into an AnnotationCommand. Most chat traffic is
ordinary conversation, so anything that doesn't match the grammar is
dropped without complaint:

    <AUTHOR> !line LINE_NUMBER COMMENT

Author: Backseat Team
Date: 2026-10-19
"""

import logging
import re
from typing import Optional

from backseat.core.models import AnnotationCommand

logger = logging.getLogger("backseat.parser")

# Width of the right-aligned timestamp the chat client appends, e.g. "  [12:34]"
STAMP_LENGTH = 9


class CommandParser:
    """
    Stateless recogniser for `!line` commands.
    """

    # Group 1: Author, Group 2: Line number, Group 3: Comment
    COMMAND_PATTERN = re.compile(r'^<([^<>]+)>\s+!line\s+([0-9]{1,18})\s+(.*)$')

    def __init__(self, stamp_length: int = STAMP_LENGTH):
        self.stamp_length = stamp_length

    def parse(self, raw: str) -> Optional[AnnotationCommand]:
        """
        Returns the command carried by `raw`, or None when `raw` is just chat.
        The line number is not checked against any document here.
        """
        match = self.COMMAND_PATTERN.match(raw.rstrip('\r\n'))
        if not match:
            logger.debug(f"Ignoring non-command chat line: {raw!r}")
            return None

        author, line, comment = match.groups()
        return AnnotationCommand(
            author=author,
            line=int(line, 10),
            comment=self._strip_stamp(comment)
        )

    def _strip_stamp(self, comment: str) -> str:
        """Removes the transport's trailing timestamp, recognised by its final ']'."""
        if comment.endswith(']'):
            return comment[:-self.stamp_length] if self.stamp_length else comment
        return comment
