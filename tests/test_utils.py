"""Tests for doxysearch.utils module."""

import time
from io import StringIO
from loguru import logger
from doxysearch.utils import timer


def capture():
    # type: () -> tuple[StringIO, int]
    log_output = StringIO()
    handler_id = logger.add(log_output, format="{message}", level="DEBUG")
    return log_output, handler_id


def test_timer_logs_completion():
    # type: () -> None
    """Test timer logs the elapsed time when the block completes."""
    log_output, handler_id = capture()

    with timer("Loading all_b.js") as t:
        time.sleep(0.01)

    logger.remove(handler_id)
    log_content = log_output.getvalue()
    assert "Loading all_b.js - completed" in log_content
    assert "seconds)" in log_content
    assert "started" not in log_content

    time_part = log_content.split("(")[1].split(" ")[0]
    assert float(time_part) >= 0.01
    assert t.elapsed >= 0.01


def test_timer_with_log_start():
    # type: () -> None
    """Test timer logs a start message when asked to."""
    log_output, handler_id = capture()

    with timer("Parsing", log_start=True):
        pass

    logger.remove(handler_id)
    log_content = log_output.getvalue()
    assert log_content.index("Parsing - started") < log_content.index("Parsing - completed")


def test_timer_logs_on_error():
    # type: () -> None
    """Test the completion message is logged even if the block raises."""
    log_output, handler_id = capture()

    try:
        with timer("Failing"):
            raise ValueError("boom")
    except ValueError:
        pass

    logger.remove(handler_id)
    assert "Failing - completed" in log_output.getvalue()
