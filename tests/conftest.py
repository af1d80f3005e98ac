import logging

import pytest

from helpers import make_editor


@pytest.fixture
def editor():
    """An editor on an empty, unnamed buffer with fake terminal and clipboard."""
    return make_editor()


@pytest.fixture(autouse=True)
def quiet_minivim_logging(caplog):
    caplog.set_level(logging.WARNING, logger="minivim")
