#!/usr/bin/env python3
"""
BACKSEAT ANNOTATION CONTEXT
---------------------------
The session record for one attached document. Owned by the AnnotationBridge,
created on attach and thrown away on detach or document switch, so no
annotation state outlives the document it belongs to.

Author: Backseat Team
Date: 2026-10-19
"""

from dataclasses import dataclass

from backseat.annotation.indicators import IndicatorManager
from backseat.annotation.reveal import RevealController
from backseat.annotation.store import AnnotationStore
from backseat.surface.base import EditingSurface


@dataclass
class AnnotationContext:
    """
    Everything bound to the target document for the lifetime of a session.
    """
    document: EditingSurface        # The document being annotated
    store: AnnotationStore          # line -> comments for this document only
    indicators: IndicatorManager    # Markers drawn on this document
    reveal: RevealController        # Message formatting for this document

    def close(self) -> None:
        """Destroys every marker and empties the store."""
        self.store.clear_all()
