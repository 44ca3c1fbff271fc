"""Tests for configuration loading, synthetic data generation and run folders."""

import json
import logging
from pathlib import Path
import sys

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from TemporalPool.data.synthetic import SPIKE_AMPLITUDE, make_datasets, make_synthetic_sequences
from TemporalPool.utils.config import DataConfig, ModelConfig, TrainingConfig, load_config
from TemporalPool.utils.path_manager import incremental_path


CONFIG_DIR = PROJECT_ROOT / "experiments" / "configs"


def test_defaults_without_path():
    bundle = load_config(None)
    assert bundle.data == DataConfig()
    assert bundle.model == ModelConfig()
    assert bundle.training == TrainingConfig()
    assert bundle.raw == {}
    assert bundle.config_name == "default"


@pytest.mark.parametrize("config_path", sorted(CONFIG_DIR.glob("*.yaml")), ids=lambda p: p.name)
def test_shipped_configs_load(config_path: Path):
    bundle = load_config(str(config_path))
    assert bundle.config_name == config_path.stem
    assert bundle.model.pooling in {"max", "avg"}
    assert 0.0 < bundle.data.train_test_split < 1.0


def test_yaml_values_are_coerced_and_unknown_keys_warned(tmp_path: Path, caplog):
    path = tmp_path / "custom.yaml"
    path.write_text(
        "data:\n"
        "  time_steps: '32'\n"
        "  train_test_split: '0.75'\n"
        "  colour: blue\n"
        "model:\n"
        "  filters: ['8', '16']\n"
        "  pooling: avg\n"
        "training:\n"
        "  learning_rate: 1\n"
    )

    with caplog.at_level(logging.WARNING):
        bundle = load_config(str(path))

    assert bundle.data.time_steps == 32
    assert bundle.data.train_test_split == 0.75
    assert bundle.model.filters == [8, 16]
    assert bundle.model.pooling == "avg"
    assert isinstance(bundle.training.learning_rate, float)
    assert bundle.config_name == "custom"
    assert "colour" in caplog.text


def test_json_config(tmp_path: Path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({"training": {"epochs": 2, "monitor": "val_loss"}}))

    bundle = load_config(str(path))

    assert bundle.training.epochs == 2
    assert bundle.training.monitor == "val_loss"
    assert bundle.raw["training"]["epochs"] == 2


def test_malformed_configs(tmp_path: Path):
    bad_section = tmp_path / "bad.yaml"
    bad_section.write_text("data: [1, 2]\n")
    with pytest.raises(ValueError):
        load_config(str(bad_section))

    not_mapping = tmp_path / "list.yaml"
    not_mapping.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        load_config(str(not_mapping))

    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_synthetic_sequences_place_spike_in_class_channel():
    x, y = make_synthetic_sequences(num_samples=64, time_steps=20, channels=3, num_classes=5, seed=0)

    assert x.shape == (64, 20, 3) and x.dtype == np.float32
    assert y.shape == (64,) and set(np.unique(y)) <= set(range(5))
    spike_channels = x.max(axis=1).argmax(axis=1)
    np.testing.assert_array_equal(spike_channels, y % 3)
    assert np.all(x.max(axis=(1, 2)) > SPIKE_AMPLITUDE / 2)


def test_synthetic_sequences_are_seeded():
    a = make_synthetic_sequences(8, 5, 2, 2, seed=3)
    b = make_synthetic_sequences(8, 5, 2, 2, seed=3)
    np.testing.assert_array_equal(a[0], b[0])
    np.testing.assert_array_equal(a[1], b[1])


def test_synthetic_sequences_validate_sizes():
    with pytest.raises(ValueError):
        make_synthetic_sequences(0, 5, 2, 2)


def test_make_datasets_split():
    cfg = DataConfig(num_samples=20, time_steps=6, channels=2, num_classes=2,
                     batch_size=4, test_batch_size=3, train_test_split=0.8, shuffle_buffer=32)

    train_ds, test_ds = make_datasets(cfg, seed=1)

    train_count = sum(int(xb.shape[0]) for xb, _ in train_ds)
    test_count = sum(int(xb.shape[0]) for xb, _ in test_ds)
    assert (train_count, test_count) == (16, 4)
    xb, yb = next(iter(train_ds))
    assert tuple(xb.shape) == (4, 6, 2)
    assert tuple(yb.shape) == (4,)


def test_make_datasets_rejects_degenerate_split():
    with pytest.raises(ValueError):
        make_datasets(DataConfig(train_test_split=1.0))
    with pytest.raises(ValueError):
        make_datasets(DataConfig(num_samples=2, train_test_split=0.1))


def test_incremental_path_creates_unique_folders(tmp_path: Path):
    first = incremental_path(str(tmp_path), "TemporalCNN", "smoke")
    second = incremental_path(str(tmp_path), "TemporalCNN", "smoke")

    assert first.endswith("TemporalCNN_smoke_01")
    assert second.endswith("TemporalCNN_smoke_02")
    assert Path(first).is_dir() and Path(second).is_dir()


def test_scalar_list_float_and_padded_string_values(tmp_path: Path):
    path = tmp_path / "loose.yaml"
    path.write_text(
        "data:\n"
        "  time_steps: 2.5\n"
        "  channels: 3.0\n"
        "model:\n"
        "  filters: 16\n"
        "  pooling: ' avg '\n"
    )

    bundle = load_config(str(path))

    assert bundle.model.filters == [16]
    assert bundle.model.pooling == "avg"
    assert bundle.data.time_steps == 2.5
    assert bundle.data.channels == 3
    assert isinstance(bundle.data.channels, int)
