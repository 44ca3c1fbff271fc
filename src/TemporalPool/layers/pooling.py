"""
Global pooling layers for 1D temporal data (audio, time series, token sequences).

Both layers collapse the time axis of a `[batch, time, channels]` tensor into a
single value per channel, producing `[batch, channels]`. They own no
parameters and behave the same at training and inference time; the reduction
itself is a single TensorFlow reduce op over axis 1.
"""

from typing import Any, Callable, Optional, Tuple, Union

import tensorflow as tf

from TemporalPool.layers.base import Layer, ShapeLike, normalize_shape
from TemporalPool.layers.errors import ShapeMismatchError

TIME_AXIS = 1


class _GlobalPool1D(Layer):
   """Shared implementation; subclasses pick the reduction op."""

   reduction: Callable[..., tf.Tensor]

   def _check_shape(self, input_shape: ShapeLike) -> Tuple[Optional[int], ...]:
      batch, time, channels = normalize_shape(input_shape, expected_rank=3, layer_name=self.name)
      if time == 0:
         raise ShapeMismatchError(
            "Cannot pool over an empty time axis.",
            actual_shape=(batch, time, channels),
            layer_name=self.name,
         )
      return batch, time, channels

   def build(self, graph_context: Any, input_shape: ShapeLike) -> None:
      self._check_shape(input_shape)

   def compute_output_shape(self, input_shape: ShapeLike) -> Tuple[Optional[int], Optional[int]]:
      batch, _, channels = self._check_shape(input_shape)
      return batch, channels

   def forward(
      self,
      inputs: tf.Tensor,
      training: Optional[bool] = None,
      loss_count: Optional[Union[int, tf.Tensor]] = None,
   ) -> tf.Tensor:
      return self.reduction(inputs, axis=TIME_AXIS)


class GlobalMaxPool1D(_GlobalPool1D):
   """
   Global max pooling over the time dimension.

   For every `(b, c)`, `output[b, c] = max_t input[b, t, c]`.
   """

   reduction = staticmethod(tf.reduce_max)


class GlobalAvgPool1D(_GlobalPool1D):
   """
   Global average pooling over the time dimension.

   For every `(b, c)`, `output[b, c] = mean_t input[b, t, c]`.
   """

   reduction = staticmethod(tf.reduce_mean)
