"""
Keras wrapper around the global temporal pooling layers.

`KerasGlobalPool1D` lets `GlobalMaxPool1D` / `GlobalAvgPool1D` sit inside a
Keras functional or sequential model: Keras drives `build`,
`compute_output_shape` and `call`, and each one is forwarded to the wrapped
framework layer so shape checks and numerics stay in one place. The class is
registered as serializable, so models containing it round-trip through the
`.keras` format.
"""

from typing import Any, Dict, Optional

import keras
import tensorflow as tf

from TemporalPool.layers.base import ShapeLike
from TemporalPool.layers.pooling import GlobalAvgPool1D, GlobalMaxPool1D, _GlobalPool1D

POOLING_MODES = {
   "max": GlobalMaxPool1D,
   "avg": GlobalAvgPool1D,
}


def make_global_pool1d(mode: str = "max", name: str = "") -> _GlobalPool1D:
   """
   Return the global temporal pooling layer for `mode`.

   Args:
      mode (str): "max" or "avg" (case-insensitive).
      name (str, optional): Name given to the layer.
   Returns:
      _GlobalPool1D: A `GlobalMaxPool1D` or `GlobalAvgPool1D` instance.
   Raises:
      ValueError: If `mode` is not supported.
   """
   key = mode.strip().lower()
   if key not in POOLING_MODES:
      raise ValueError(f"Unsupported pooling mode: {mode}. Choose from {', '.join(sorted(POOLING_MODES))}.")
   return POOLING_MODES[key](name=name)


@keras.saving.register_keras_serializable(package="TemporalPool")
class KerasGlobalPool1D(keras.layers.Layer):
   """
   Keras layer reducing `[B, T, C]` inputs to `[B, C]` over the time axis.

   Args:
      mode (str): "max" or "avg".
      **kwargs: Standard `keras.layers.Layer` arguments (name, dtype, ...).
   """

   def __init__(self, mode: str = "max", **kwargs) -> None:
      super().__init__(**kwargs)
      self.pooling = make_global_pool1d(mode, name=self.name)
      self.mode = mode.strip().lower()

   def build(self, input_shape: ShapeLike) -> None:
      self.pooling.build(None, input_shape)
      super().build(input_shape)

   def compute_output_shape(self, input_shape: ShapeLike):
      return self.pooling.compute_output_shape(input_shape)

   def call(self, inputs: tf.Tensor, training: Optional[bool] = None) -> tf.Tensor:
      return self.pooling.forward(inputs, training=training)

   def get_config(self) -> Dict[str, Any]:
      config = super().get_config()
      config.update({"mode": self.mode})
      return config
