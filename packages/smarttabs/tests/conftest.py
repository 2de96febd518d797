import pytest

from smarttabs.config import SmartTabsConfig
from smarttabs.host import HostOptions


@pytest.fixture
def config() -> SmartTabsConfig:
    return SmartTabsConfig()


@pytest.fixture
def options() -> HostOptions:
    """Four-column tabs and indentation levels."""
    return HostOptions(tabstop=4, shiftwidth=4)
