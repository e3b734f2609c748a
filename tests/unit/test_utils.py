import logging

from app.core.db.base import utc_now_iso
from app.core.logging import ContextFilter
from app.core.utils import truncate_content


def test_short_content_is_unchanged():
    assert truncate_content("short note") == "short note"


def test_empty_content_gives_empty_string():
    assert truncate_content("") == ""
    assert truncate_content(None) == ""


def test_long_content_is_cut_at_word_boundary():
    text = "alpha beta gamma delta"
    assert truncate_content(text, max_length=12) == "alpha beta..."


def test_long_word_without_spaces_is_hard_cut():
    assert truncate_content("x" * 20, max_length=5) == "xxxxx..."


def test_timestamps_are_utc_with_milliseconds():
    stamp = utc_now_iso()
    assert stamp.endswith("Z")
    assert len(stamp.split(".")[-1]) == 4


def test_context_filter_renders_bound_fields():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    record.batch_id = "b-1"
    ContextFilter().filter(record)
    assert record.context == " batch_id=b-1 |"

    bare = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    ContextFilter().filter(bare)
    assert bare.context == ""
