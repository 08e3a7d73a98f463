import sys
import pytest
from loguru import logger
from src.core.logging import setup_logging
from src.cycle import CycleCollection, CycleItem

@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.__stderr__)

def test_setup_logging_writes_debug_to_file(tmp_path, restore_logger):
    log_dir = tmp_path / "logs"

    setup_logging(debug_mode=False, log_dir=str(log_dir))
    CycleCollection([CycleItem(), CycleItem()], auto_select="first")
    logger.remove()  # flush and close the file sink

    log_files = list(log_dir.glob("cycle_*.log"))
    assert len(log_files) == 1
    content = log_files[0].read_text(encoding="utf-8")
    assert "Logging initialized." in content
    assert "auto_select 'selected'" in content

def test_setup_logging_uses_configured_debug_mode(restore_logger, capsys):
    setup_logging()
    logger.debug("hidden by default")
    logger.info("shown")

    err = capsys.readouterr().err
    assert "shown" in err
    assert "hidden by default" not in err
