import locale

import pytest


@pytest.fixture(autouse=True)
def c_number_format():
    """run_app switches LC_NUMERIC to the host locale; put it back after each test."""
    yield
    locale.setlocale(locale.LC_NUMERIC, "C")
