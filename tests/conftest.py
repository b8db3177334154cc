import logging

import pytest

from fakes import RecordingStorage


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture(autouse=True)
def _restore_root_log_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
