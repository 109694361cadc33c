#!/usr/bin/env python3
"""
BACKSEAT BRIDGE SUITE - End-to-End Scenarios
--------------------------------------------
Drives the engine the way a live session does: chat lines arrive through
the chat log buffer, markers appear on the target document, and moving
the cursor reveals what the audience said.

Author: Backseat Team
Date: 2026-10-19
"""

import pytest

from backseat.config import BackseatConfig
from backseat.core.engine import AnnotationBridge
from backseat.core.errors import BackseatError
from backseat.core.models import Comment
from backseat.surface.buffer import TextBuffer

SOURCE = "\n".join(f"print({i})" for i in range(1, 11))


@pytest.fixture
def session():
    document = TextBuffer("main.py", SOURCE)
    chat_log = TextBuffer("#backseat")
    bridge = AnnotationBridge()
    bridge.attach(document, chat_log=chat_log)
    return bridge, document, chat_log


def say(chat_log, text):
    chat_log.insert(text + "\n")


def test_scenario_a_first_annotation(session):
    bridge, document, chat_log = session
    say(chat_log, "<alice> !line 5 use a hashmap here")

    store = bridge.context.store
    assert store.lines() == [5]
    assert list(store.get(5)) == [Comment("alice", "use a hashmap here")]
    assert len(document.markers()) == 1
    assert document.markers()[0].start == document.line_span(5)[0]


def test_scenario_b_repeat_is_ignored(session):
    bridge, document, chat_log = session
    say(chat_log, "<alice> !line 5 use a hashmap here")
    marker = document.markers()[0]
    say(chat_log, "<alice> !line 5 use a hashmap here")

    assert len(bridge.context.store.get(5)) == 1
    assert document.markers() == [marker]


def test_scenario_c_second_author_and_reveal(session):
    bridge, document, chat_log = session
    say(chat_log, "<alice> !line 5 use a hashmap here")
    say(chat_log, "<bob> !line 5 nah, use a tree")

    assert list(bridge.context.store.get(5)) == [
        Comment("bob", "nah, use a tree"),
        Comment("alice", "use a hashmap here"),
    ]
    assert len(document.markers()) == 1

    document.goto_line(5)
    assert document.messages[-1].plain == "bob - nah, use a tree; alice - use a hashmap here"


def test_scenario_d_missing_author(session):
    bridge, document, chat_log = session
    say(chat_log, "!line 3 missing author")
    assert len(bridge.context.store) == 0
    assert document.markers() == []


def test_scenario_e_clear_all(session):
    bridge, document, chat_log = session
    say(chat_log, "<alice> !line 5 use a hashmap here")
    say(chat_log, "<bob> !line 5 nah, use a tree")
    say(chat_log, "<carol> !line 2 off by one")

    bridge.clear_all()
    assert len(bridge.context.store) == 0
    assert len(bridge.context.indicators) == 0
    assert document.markers() == []


def test_clear_single_line(session):
    bridge, document, chat_log = session
    say(chat_log, "<alice> !line 5 a")
    say(chat_log, "<alice> !line 6 b")
    bridge.clear_line(5)
    assert bridge.context.store.lines() == [6]
    assert len(document.markers()) == 1


def test_out_of_range_is_dropped(session):
    bridge, document, chat_log = session
    assert bridge.on_incoming_chat_text("<alice> !line 11 past the end") is None
    assert bridge.on_incoming_chat_text("<alice> !line 0 before the start") is None
    assert len(bridge.context.store) == 0
    assert document.markers() == []


def test_stamped_chat_line(session):
    bridge, _, chat_log = session
    say(chat_log, "<alice> !line 1 nice  [21:07]")
    assert list(bridge.context.store.get(1)) == [Comment("alice", "nice")]


def test_out_of_band_author(session):
    bridge, _, _ = session
    result = bridge.on_incoming_chat_text("!line 4 from the transport", author="dave")
    assert list(result) == [Comment("dave", "from the transport")]
    assert bridge.on_incoming_chat_text("!line 4 nobody") is None


def test_multiple_messages_in_one_insert(session):
    bridge, _, chat_log = session
    chat_log.insert("<alice> !line 1 a\nsome chatter\n<bob> !line 2 b\n")
    assert bridge.context.store.lines() == [1, 2]


def test_target_document_changes_are_never_parsed():
    # Command-looking text in the target document must not become annotations
    # when marker placement fires the document's own change hooks.
    document = TextBuffer("notes.txt", "<eve> !line 2 sneaky\nsecond\nthird")
    chat_log = TextBuffer("#backseat")
    fired = []
    document.add_change_hook(lambda start, end: fired.append((start, end)))

    bridge = AnnotationBridge()
    bridge.attach(document, chat_log=chat_log)
    say(chat_log, "<alice> !line 1 hello")

    assert fired, "Placing a marker should notify the document's hooks"
    assert bridge.context.store.lines() == [1]


def test_switching_documents_resets_state():
    first = TextBuffer("a.py", SOURCE)
    second = TextBuffer("b.py", SOURCE)
    chat_log = TextBuffer("#backseat")
    bridge = AnnotationBridge()

    bridge.attach(first, chat_log=chat_log)
    say(chat_log, "<alice> !line 3 hi")
    assert len(first.markers()) == 1

    bridge.attach(second, chat_log=chat_log)
    assert first.markers() == []
    assert len(bridge.context.store) == 0

    say(chat_log, "<alice> !line 3 hi")
    assert first.markers() == []
    assert len(second.markers()) == 1


def test_commands_target_document_bound_at_attach():
    bound = TextBuffer("bound.py", SOURCE)
    focused = TextBuffer("focused.py", SOURCE)
    bridge = AnnotationBridge()
    bridge.attach(bound)

    focused.goto_line(2)  # the user looks elsewhere
    bridge.on_incoming_chat_text("<alice> !line 2 hi")
    assert len(bound.markers()) == 1
    assert focused.markers() == []


def test_detach_unhooks_chat_log(session):
    bridge, document, chat_log = session
    say(chat_log, "<alice> !line 1 a")
    bridge.detach()

    assert bridge.context is None
    assert document.markers() == []
    say(chat_log, "<alice> !line 2 b")
    assert document.markers() == []
    assert bridge.on_incoming_chat_text("<alice> !line 2 b") is None


def test_config_drives_glyph_and_reveal_style():
    document = TextBuffer("main.py", SOURCE)
    config = BackseatConfig(glyph="*", author_style="bold red", separator=" / ")
    bridge = AnnotationBridge(config)
    bridge.attach(document)
    bridge.on_incoming_chat_text("<alice> !line 1 a")
    bridge.on_incoming_chat_text("<bob> !line 1 b")

    assert document.markers()[0].glyph == "*"
    document.goto_line(1)
    assert document.messages == []  # cursor never left line 1
    document.goto_line(2)
    document.goto_line(1)
    assert document.messages[-1].plain == "bob - b / alice - a"


def test_huge_line_number_is_dropped(session):
    bridge, document, chat_log = session
    say(chat_log, "<alice> !line " + "9" * 5000 + " way off")
    say(chat_log, "<alice> !line 2 still listening")
    assert bridge.context.store.lines() == [2]


def test_document_cannot_be_its_own_chat_log():
    document = TextBuffer("notes.txt", "<eve> !line 2 sneaky\nsecond\nthird")
    bridge = AnnotationBridge()

    with pytest.raises(BackseatError):
        bridge.attach(document, chat_log=document)
    assert bridge.context is None

    bridge.attach(document)
    bridge.on_incoming_chat_text("<alice> !line 1 hello")
    assert bridge.context.store.lines() == [1]
