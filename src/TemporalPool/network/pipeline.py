"""
A minimal sequential assembler for framework layers.

`LayerPipeline` drives its layers through the standard lifecycle:

1. `compile` runs static shape inference across every layer
   (`compute_output_shape`), then builds each layer with its input shape.
   Shape errors surface here, before any data flows.
2. `forward` runs one batch through the layers in order.

It also exports and imports parameters uniformly over all layers, including
parameterless ones, and renders a per-layer summary table.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
import logging

import tensorflow as tf

from TemporalPool.layers.base import Layer, ShapeLike, shape_to_tuple
from TemporalPool.layers.errors import IgnoredParametersWarning
from TemporalPool.utils.logger import get_logger

logger = get_logger(__name__)

Shape = Tuple[Optional[int], ...]


class LayerPipeline:
   """
   Ordered stack of layers, each consuming the previous layer's output.

   Args:
      layers (Sequence[Layer]): Layers in execution order.
      name (str, optional): Name used in summaries and log messages.
   """

   def __init__(self, layers: Sequence[Layer], name: str = "pipeline") -> None:
      if not layers:
         raise ValueError("A LayerPipeline needs at least one layer.")
      self.layers: List[Layer] = list(layers)
      self.name = name
      keys = [self.layer_key(i) for i in range(len(self.layers))]
      duplicates = sorted({key for key in keys if keys.count(key) > 1})
      if duplicates:
         raise ValueError(f"Layer keys must be unique in {name}; duplicated: {', '.join(duplicates)}")
      self.input_shape: Optional[Shape] = None
      self.output_shapes: List[Shape] = []

   @property
   def compiled(self) -> bool:
      return self.input_shape is not None

   def layer_key(self, index: int) -> str:
      layer = self.layers[index]
      return layer.name or f"{type(layer).__name__.lower()}_{index + 1}"

   def compile(self, input_shape: ShapeLike, graph_context: Any = None) -> Shape:
      """
      Infer shapes through all layers, then build them.

      Args:
         input_shape (ShapeLike): Shape of one input batch, batch dimension included.
         graph_context (Any, optional): Passed through to each layer's `build`.
      Returns:
         Shape: Output shape of the last layer.
      Raises:
         ShapeMismatchError: If any layer rejects its input shape.
      """
      self.input_shape = None
      current = shape_to_tuple(input_shape, layer_name=self.name)
      input_shapes: List[Shape] = []
      output_shapes: List[Shape] = []
      for index, layer in enumerate(self.layers):
         input_shapes.append(current)
         current = tuple(layer.compute_output_shape(current))
         output_shapes.append(current)
         logger.debug("%s: %s -> %s", self.layer_key(index), input_shapes[-1], current)

      for layer, layer_input_shape in zip(self.layers, input_shapes):
         layer.build(graph_context, layer_input_shape)

      self.input_shape = input_shapes[0]
      self.output_shapes = output_shapes
      logger.info(
         "Compiled %s with %d layers: %s -> %s", self.name, len(self.layers), self.input_shape, current
      )
      return current

   def forward(self, inputs: tf.Tensor, training: bool = False) -> tf.Tensor:
      if not self.compiled:
         raise RuntimeError(f"{self.name} must be compiled before forward is called.")
      outputs = tf.convert_to_tensor(inputs)
      for layer in self.layers:
         outputs = layer.forward(outputs, training=training)
      return outputs

   __call__ = forward

   @property
   def param_count(self) -> int:
      return sum(layer.param_count for layer in self.layers)

   def get_weights(self) -> Dict[str, Dict[str, Any]]:
      return {self.layer_key(i): layer.weights for i, layer in enumerate(self.layers)}

   def load_weights(self, weights: Mapping[str, Mapping[str, Any]]) -> List[IgnoredParametersWarning]:
      """
      Assign parameters to every layer from a `{layer_key: {param: array}}` mapping.

      Every layer receives its entry (an empty mapping when absent), so
      parameterless layers go through the same path as parameterised ones.

      Returns:
         List[IgnoredParametersWarning]: Warnings for keys that were not assigned,
         including top-level keys that name no layer.
      """
      warnings: List[IgnoredParametersWarning] = []
      keys = []
      for index, layer in enumerate(self.layers):
         key = self.layer_key(index)
         keys.append(key)
         warning = layer.load_parameters(weights.get(key, {}))
         if warning is not None:
            warnings.append(warning)
      unknown = set(weights) - set(keys)
      if unknown:
         warnings.append(IgnoredParametersWarning(self.name, unknown))
      for warning in warnings:
         logger.warning("%s", warning)
      return warnings

   def summary(self) -> str:
      if not self.compiled:
         raise RuntimeError(f"{self.name} must be compiled before a summary can be produced.")
      header = f"{'Layer':<24}{'Type':<20}{'Output shape':<20}{'Params':>10}"
      rule = "=" * len(header)
      lines = [f"Pipeline: {self.name}", rule, header, rule]
      for index, (layer, shape) in enumerate(zip(self.layers, self.output_shapes)):
         lines.append(
            f"{self.layer_key(index):<24}{type(layer).__name__:<20}{str(shape):<20}{layer.param_count:>10}"
         )
      lines.append(rule)
      lines.append(f"Total params: {self.param_count}")
      return "\n".join(lines)

   def log_summary(self, log: Optional[logging.Logger] = None) -> None:
      log = log or logger
      for line in self.summary().splitlines():
         log.info(line)

   def __str__(self) -> str:
      return f"LayerPipeline(name={self.name}, layers={len(self.layers)})"
