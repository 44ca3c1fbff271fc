"""Tests for run logging: file handlers and the CLI entry point's logging order."""

import logging
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
for path in (SRC_ROOT, PROJECT_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import main as entry_point
from TemporalPool.utils.logger import add_file_handler, get_logger


CONFIG_PATH = PROJECT_ROOT / "experiments" / "configs" / "temporal_cnn.yaml"


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_add_file_handler_writes_run_log(tmp_path: Path):
    logger = get_logger("temporal_pool_file_test")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    log_file = Path(add_file_handler(logger, str(tmp_path / "run"), "INFO"))
    try:
        logger.debug("hidden detail")
        logger.info("visible message")
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    assert log_file.parent == tmp_path / "run"
    assert log_file.name.startswith("run_") and log_file.suffix == ".log"
    text = log_file.read_text(encoding="utf-8")
    assert "visible message" in text
    assert "| INFO |" in text
    assert "hidden detail" not in text


def test_main_logs_config_loading_and_writes_run_log(tmp_path: Path, monkeypatch, caplog, restore_root_logger):
    calls = []

    def fake_train(config_bundle, save_dir):
        calls.append((config_bundle.config_name, save_dir))
        return None, None, {"accuracy": 1.0}

    monkeypatch.setattr(entry_point, "train_temporal_cnn", fake_train)

    with caplog.at_level(logging.INFO):
        entry_point.main(str(CONFIG_PATH), str(tmp_path), "INFO")

    assert "Loading YAML config" in caplog.text
    assert "Final test accuracy: 1.0000" in caplog.text
    assert len(calls) == 1
    assert calls[0][0] == "temporal_cnn"

    run_dir = Path(calls[0][1])
    log_files = list(run_dir.glob("run_*.log"))
    assert len(log_files) == 1
    for handler in restore_root_logger.handlers:
        handler.flush()
    assert "Logging run to" in log_files[0].read_text(encoding="utf-8")
