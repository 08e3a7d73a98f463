import pytest
from loguru import logger
from src.core.config import set_config
from src.cycle import CycleItem

@pytest.fixture
def caplog(caplog):
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(caplog.handler, format="{message}", level=0)
    yield caplog
    logger.remove(handler_id)

@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the default in-memory configuration."""
    set_config(None)
    yield
    set_config(None)

@pytest.fixture
def items():
    """Three fresh navigable items: [m1, m2, m3]."""
    return [CycleItem(name=f"m{i}") for i in (1, 2, 3)]
