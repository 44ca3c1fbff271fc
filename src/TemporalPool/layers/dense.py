"""Fully connected layer: `y = activation(x @ kernel + bias)` on `[batch, features]` inputs."""

from typing import Any, Dict, Mapping, Optional, Tuple, Union

import keras
import numpy as np
import tensorflow as tf

from TemporalPool.layers.base import Layer, ShapeLike, normalize_shape
from TemporalPool.layers.errors import IgnoredParametersWarning, ShapeMismatchError
from TemporalPool.utils.logger import get_logger

logger = get_logger(__name__)


class Dense(Layer):
   """
   Densely connected layer with a Glorot-uniform kernel and a zero bias.

   Args:
      units (int): Output feature dimension.
      activation (Optional[str]): Keras activation identifier (e.g. "relu"). None means linear.
      name (str, optional): Layer name.
      seed (Optional[int]): Seed for the kernel initializer.
   """

   def __init__(
      self,
      units: int,
      activation: Optional[str] = None,
      name: str = "",
      seed: Optional[int] = None,
   ) -> None:
      super().__init__(name)
      if units <= 0:
         raise ValueError(f"units must be positive, got {units}")
      self.units = units
      self.activation = activation
      self._activation_fn = keras.activations.get(activation) if activation else None
      self._seed = seed
      self.kernel: Optional[tf.Variable] = None
      self.bias: Optional[tf.Variable] = None

   @property
   def has_activation(self) -> bool:
      return self._activation_fn is not None

   def _in_features(self, input_shape: ShapeLike) -> int:
      _, features = normalize_shape(input_shape, expected_rank=2, layer_name=self.name)
      if features is None:
         raise ShapeMismatchError(
            "The last dimension of a Dense input must be known.",
            expected_rank=2,
            actual_shape=tf.TensorShape(input_shape).as_list(),
            layer_name=self.name,
         )
      return features

   def build(self, graph_context: Any, input_shape: ShapeLike) -> None:
      in_features = self._in_features(input_shape)
      initializer = keras.initializers.GlorotUniform(seed=self._seed)
      self.kernel = tf.Variable(
         initializer(shape=(in_features, self.units), dtype="float32"),
         name=f"{self.name or 'dense'}_kernel",
      )
      self.bias = tf.Variable(tf.zeros((self.units,), dtype=tf.float32), name=f"{self.name or 'dense'}_bias")
      logger.debug("Built %s with kernel shape (%d, %d)", self, in_features, self.units)

   def compute_output_shape(self, input_shape: ShapeLike) -> Tuple[Optional[int], int]:
      batch, _ = normalize_shape(input_shape, expected_rank=2, layer_name=self.name)
      self._in_features(input_shape)
      return batch, self.units

   def forward(
      self,
      inputs: tf.Tensor,
      training: Optional[bool] = None,
      loss_count: Optional[Union[int, tf.Tensor]] = None,
   ) -> tf.Tensor:
      if self.kernel is None:
         raise RuntimeError(f"{self} must be built before forward is called.")
      outputs = tf.matmul(inputs, self.kernel) + self.bias
      if self._activation_fn is not None:
         outputs = self._activation_fn(outputs)
      return outputs

   def get_parameters(self) -> Dict[str, np.ndarray]:
      if self.kernel is None:
         return {}
      return {"kernel": self.kernel.numpy(), "bias": self.bias.numpy()}

   def load_parameters(self, data: Mapping[str, Any]) -> Optional[IgnoredParametersWarning]:
      if self.kernel is None:
         raise RuntimeError(f"{self} must be built before parameters can be loaded.")
      targets = {"kernel": self.kernel, "bias": self.bias}
      # validate everything before assigning anything
      pending = []
      for key, variable in targets.items():
         if key not in data:
            continue
         value = np.asarray(data[key], dtype=np.float32)
         if value.shape != tuple(variable.shape):
            raise ShapeMismatchError(
               f"Parameter '{key}' has shape {value.shape}, expected {tuple(variable.shape)}.",
               actual_shape=value.shape,
               layer_name=self.name,
            )
         pending.append((variable, value))
      for variable, value in pending:
         variable.assign(value)
      ignored = set(data) - set(targets)
      if not ignored:
         return None
      warning = IgnoredParametersWarning(self.name, ignored)
      logger.debug("%s", warning)
      return warning

   def __str__(self) -> str:
      return f"Dense(name={self.name}, units={self.units}, activation={self.activation})"

   __repr__ = __str__
