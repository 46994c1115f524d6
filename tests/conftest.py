import pytest

from builders import WEEKDAY_NOON


@pytest.fixture
def weekday_noon():
    return WEEKDAY_NOON
