#!/usr/bin/env python3
"""
BACKSEAT ENGINE - The Bridge
----------------------------
The AnnotationBridge sits between the collaborators and the annotation
core. It owns the session context for the attached document, receives chat
text from the transport (directly or through the chat log's change hook)
and routes parsed commands into the store.

Chat commands always target the document bound at attach time, not
whichever document happens to have focus when the message arrives.

Author: Backseat Team
Date: 2026-10-19
"""

import logging
from typing import Optional

from backseat.annotation.context import AnnotationContext
from backseat.annotation.indicators import IndicatorManager
from backseat.annotation.parser import CommandParser
from backseat.annotation.reveal import RevealController
from backseat.annotation.store import AnnotationStore
from backseat.config import BackseatConfig
from backseat.core.errors import BackseatError, OutOfRangeLine
from backseat.core.models import Comment, LineAnnotations
from backseat.surface.base import EditingSurface

logger = logging.getLogger("backseat.engine")


class AnnotationBridge:
    """
    Lifecycle owner and inbound entry point of the annotation engine.
    """

    def __init__(self, config: Optional[BackseatConfig] = None):
        self.config = config or BackseatConfig()
        self.parser = CommandParser(stamp_length=self.config.suffix_length)
        self.context: Optional[AnnotationContext] = None
        self.chat_log: Optional[EditingSurface] = None

    # --- Lifecycle ---

    def attach(self, document: EditingSurface,
               chat_log: Optional[EditingSurface] = None) -> AnnotationContext:
        """
        Binds the engine to `document`. Any previous document loses all its
        markers and annotations first. When `chat_log` is given, text
        inserted into it is parsed for commands; it must be a separate buffer.
        """
        if chat_log is document:
            # Marker placement would re-feed the document's own text to the parser
            raise BackseatError(f"'{document.name}' cannot be its own chat log")

        if self.context is not None:
            logger.info(f"Switching from '{self.context.document.name}' to '{document.name}'")
        self.detach()

        self.context = self._build_context(document)
        if chat_log is not None:
            self.chat_log = chat_log
            chat_log.add_change_hook(self.on_chat_document_changed)

        logger.info(f"Attached to '{document.name}' ({document.line_count()} lines)")
        return self.context

    def detach(self) -> None:
        if self.chat_log is not None:
            self.chat_log.remove_change_hook(self.on_chat_document_changed)
            self.chat_log = None
        if self.context is not None:
            self.context.close()
            logger.info(f"Detached from '{self.context.document.name}'")
            self.context = None

    def _build_context(self, document: EditingSurface) -> AnnotationContext:
        reveal = RevealController(
            document,
            author_style=self.config.author_style,
            separator=self.config.separator
        )
        indicators = IndicatorManager(document, reveal=reveal, glyph=self.config.glyph)
        return AnnotationContext(
            document=document,
            store=AnnotationStore(indicators),
            indicators=indicators,
            reveal=reveal
        )

    # --- Inbound surfaces ---

    def on_incoming_chat_text(self, raw: str, author: Optional[str] = None) -> Optional[LineAnnotations]:
        """
        Handles one chat line. Returns the resulting comments for the
        targeted line, or None when nothing was annotated.

        `author` is the transport's out-of-band sender, used only when the
        line itself carries no `<author>` prefix.
        """
        if self.context is None:
            logger.debug("Chat text received while detached; ignoring")
            return None

        if author and not raw.startswith('<'):
            raw = f"<{author}> {raw}"

        command = self.parser.parse(raw)
        if command is None:
            return None

        comment = Comment(author=command.author, text=command.comment)
        try:
            return self.context.store.upsert(command.line, comment)
        except OutOfRangeLine as e:
            logger.warning(f"Dropped annotation from {command.author}: {e}")
            return None

    def on_chat_document_changed(self, start: int, end: int) -> None:
        """
        Change hook for the chat log only. The target document's own change
        notifications (fired when markers are placed) never reach here.
        """
        if self.chat_log is None:
            return
        inserted = self.chat_log.text[start:end]
        for raw in inserted.splitlines():
            if raw.strip():
                self.on_incoming_chat_text(raw)

    # --- Clearing ---

    def clear_line(self, line: int) -> None:
        if self.context is not None:
            self.context.store.clear(line)

    def clear_all(self) -> None:
        if self.context is not None:
            self.context.store.clear_all()
