
import pytest

from geoformulae import dms


@pytest.fixture(autouse=True)
def no_separator():
    """Format degrees, minutes and seconds without a separator, as the expected strings are written"""
    with dms.separator(''):
        yield
