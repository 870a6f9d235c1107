"""
Shared pytest fixtures.
"""

import pytest


@pytest.fixture(autouse=True)
def isolated_event_log(tmp_path, monkeypatch):
    """Send event records to a per-test file instead of ./events.log."""
    log_file = tmp_path / "events.log"
    monkeypatch.setattr("recipebox.events.EVENT_LOG_FILE", log_file)
    return log_file
