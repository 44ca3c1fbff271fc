"""
Common contract shared by every layer of the framework.

A layer is a named transformation node that the assembling code drives
through three calls, in this order, once per network lifecycle:

-  `compute_output_shape` during static shape inference,
-  `build` during parameter allocation,
-  `forward` once per executed batch.

The actual numerics are delegated to TensorFlow; layers only describe which
operation to run and on which axes. Parameters are exposed as a plain mapping
of name -> array through `get_parameters` / `load_parameters`, and the
`weights` property wraps both so generic weight-loading code can iterate over
all layers uniformly, parameterless ones included.
"""

from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import tensorflow as tf

from TemporalPool.layers.errors import IgnoredParametersWarning, ShapeMismatchError
from TemporalPool.utils.logger import get_logger

logger = get_logger(__name__)

ShapeLike = Union[tf.TensorShape, Sequence[Optional[int]]]


def shape_to_tuple(
   input_shape: ShapeLike,
   expected_rank: Optional[int] = None,
   layer_name: str = "",
) -> Tuple[Optional[int], ...]:
   """
   Convert a shape-like value of any known rank to a tuple.

   Raises:
      ShapeMismatchError: If the value is not a shape or its rank is unknown.
   """
   try:
      shape = tf.TensorShape(input_shape)
   except (TypeError, ValueError) as exc:
      raise ShapeMismatchError(
         f"Cannot interpret {input_shape!r} as a shape: {exc}",
         expected_rank=expected_rank,
         layer_name=layer_name,
      ) from exc
   if shape.rank is None:
      expected = f"a rank-{expected_rank}" if expected_rank is not None else "a known-rank"
      raise ShapeMismatchError(
         f"Expected {expected} input, got a shape of unknown rank.",
         expected_rank=expected_rank,
         layer_name=layer_name,
      )
   return tuple(shape.as_list())


def normalize_shape(
   input_shape: ShapeLike,
   expected_rank: int,
   layer_name: str = "",
) -> Tuple[Optional[int], ...]:
   """
   Convert a shape-like value to a tuple and check its rank.

   Args:
      input_shape (ShapeLike): Tuple, list or `tf.TensorShape`; unknown dims may be None.
      expected_rank (int): Rank the caller requires.
      layer_name (str, optional): Used to prefix the error message.
   Returns:
      Tuple[Optional[int], ...]: The shape as a tuple of ints / None.
   Raises:
      ShapeMismatchError: If the rank is unknown or differs from `expected_rank`.
   """
   dims = shape_to_tuple(input_shape, expected_rank=expected_rank, layer_name=layer_name)
   if len(dims) != expected_rank:
      raise ShapeMismatchError(
         f"Expected a rank-{expected_rank} input, got rank {len(dims)} with shape {dims}.",
         expected_rank=expected_rank,
         actual_shape=dims,
         layer_name=layer_name,
      )
   return dims


class Layer:
   """
   Base class for all layers.

   Subclasses override `compute_output_shape` and `forward`; parameterised
   layers also override `build`, `get_parameters` and `load_parameters`.

   Args:
      name (str, optional): Identifier used in summaries and weight mappings. May be empty.
   """

   def __init__(self, name: str = "") -> None:
      self._name = name

   @property
   def name(self) -> str:
      return self._name

   @property
   def has_activation(self) -> bool:
      return False

   @property
   def param_count(self) -> int:
      return int(sum(np.size(value) for value in self.get_parameters().values()))

   def build(self, graph_context: Any, input_shape: ShapeLike) -> None:
      """Allocate parameters for `input_shape`. No-op for stateless layers."""

   def compute_output_shape(self, input_shape: ShapeLike) -> Tuple[Optional[int], ...]:
      raise NotImplementedError

   def forward(
      self,
      inputs: tf.Tensor,
      training: Optional[bool] = None,
      loss_count: Optional[Union[int, tf.Tensor]] = None,
   ) -> tf.Tensor:
      raise NotImplementedError

   def get_parameters(self) -> Dict[str, np.ndarray]:
      return {}

   def load_parameters(self, data: Mapping[str, Any]) -> Optional[IgnoredParametersWarning]:
      """
      Assign parameters from `data`.

      Layers without parameters accept any mapping and assign nothing. When
      the mapping is not empty, the unassigned keys are reported through the
      returned warning instead of being raised.

      Args:
         data (Mapping[str, Any]): Parameter name -> array-like value.
      Returns:
         Optional[IgnoredParametersWarning]: None if every key was used (or there were none).
      """
      if not data:
         return None
      warning = IgnoredParametersWarning(self.name, data.keys())
      logger.debug("%s", warning)
      return warning

   @property
   def weights(self) -> Dict[str, np.ndarray]:
      return self.get_parameters()

   @weights.setter
   def weights(self, value: Mapping[str, Any]) -> None:
      self.load_parameters(value)

   def __str__(self) -> str:
      return f"{type(self).__name__}(name={self.name})"

   __repr__ = __str__
