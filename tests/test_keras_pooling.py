"""Tests for the Keras wrapper and the pre-made temporal CNN built on top of it."""

from pathlib import Path
import sys

import keras
import numpy as np
import pytest
import tensorflow as tf

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from TemporalPool.layers.errors import ShapeMismatchError
from TemporalPool.layers.keras_pooling import KerasGlobalPool1D, make_global_pool1d
from TemporalPool.layers.pooling import GlobalAvgPool1D, GlobalMaxPool1D
from TemporalPool.models.temporal_cnn import build_temporal_cnn


def test_factory_modes():
    assert isinstance(make_global_pool1d("max"), GlobalMaxPool1D)
    assert isinstance(make_global_pool1d(" AVG ", name="p"), GlobalAvgPool1D)
    with pytest.raises(ValueError):
        make_global_pool1d("median")


def test_keras_layer_reduces_time_axis():
    x = np.array([[[1, 2], [3, 0], [2, 5]]], dtype=np.float32)

    max_out = KerasGlobalPool1D(mode="max")(tf.constant(x))
    avg_out = KerasGlobalPool1D(mode="avg")(tf.constant(x))

    np.testing.assert_array_equal(np.asarray(max_out), [[3, 5]])
    np.testing.assert_allclose(np.asarray(avg_out), [[2.0, 7.0 / 3.0]], rtol=1e-6)


def test_keras_layer_shape_checks():
    layer = KerasGlobalPool1D()
    assert tuple(layer.compute_output_shape((None, 10, 4))) == (None, 4)
    with pytest.raises(ShapeMismatchError):
        layer.compute_output_shape((None, 4))
    with pytest.raises(ShapeMismatchError):
        KerasGlobalPool1D().build((None, 4))


def test_keras_layer_config_round_trip():
    layer = KerasGlobalPool1D(mode="avg", name="gap")

    config = layer.get_config()
    restored = KerasGlobalPool1D.from_config(config)

    assert config["mode"] == "avg"
    assert restored.name == "gap"
    assert isinstance(restored.pooling, GlobalAvgPool1D)


@pytest.mark.parametrize("pooling", ["max", "avg"])
def test_temporal_cnn_output(pooling):
    model = build_temporal_cnn(
        input_shape=(16, 3), num_classes=2, filters=(4,), dense_units=8, pooling=pooling
    )
    x = np.random.default_rng(0).normal(size=(5, 16, 3)).astype(np.float32)

    probs = np.asarray(model(x, training=False))

    assert probs.shape == (5, 2)
    np.testing.assert_allclose(probs.sum(axis=1), np.ones(5), rtol=1e-5)
    assert any(isinstance(layer, KerasGlobalPool1D) for layer in model.layers)


def test_temporal_cnn_accepts_variable_length():
    model = build_temporal_cnn(input_shape=(None, 3), num_classes=3, filters=(4, 4), dense_units=4)

    short = np.asarray(model(np.zeros((2, 7, 3), dtype=np.float32)))
    long = np.asarray(model(np.zeros((2, 31, 3), dtype=np.float32)))

    assert short.shape == long.shape == (2, 3)


def test_temporal_cnn_requires_a_conv_block():
    with pytest.raises(ValueError):
        build_temporal_cnn(filters=())


def test_temporal_cnn_save_and_reload(tmp_path: Path):
    model = build_temporal_cnn(input_shape=(12, 2), num_classes=2, filters=(4,), dense_units=4)
    x = np.random.default_rng(1).normal(size=(3, 12, 2)).astype(np.float32)
    path = tmp_path / "temporal_cnn.keras"

    model.save(path)
    reloaded = keras.models.load_model(path)

    np.testing.assert_allclose(
        np.asarray(reloaded(x, training=False)), np.asarray(model(x, training=False)), rtol=1e-5, atol=1e-6
    )
