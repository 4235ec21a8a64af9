import pytest

from pyclack import colors


@pytest.fixture(autouse=True)
def force_colors():
    # Output is not a tty under pytest, but we want to test the styling
    was_enabled = colors.is_enabled()
    colors.set_enabled(True)
    yield
    colors.set_enabled(was_enabled)
