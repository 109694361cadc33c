#!/usr/bin/env python3
"""
BACKSEAT ERRORS
---------------
Exception hierarchy for the annotation engine. Malformed chat lines and
duplicate comments are not errors and have no exception here.

Author: Backseat Team
Date: 2026-10-19
"""


class BackseatError(Exception):
    """Base class for every error raised by Backseat."""


class OutOfRangeLine(BackseatError):
    """A command targets a line the document does not have."""

    def __init__(self, line: int, line_count: int):
        self.line = line
        self.line_count = line_count
        super().__init__(f"Line {line} is outside the document (1-{line_count})")


class ConfigError(BackseatError):
    """The configuration file is missing or invalid."""
