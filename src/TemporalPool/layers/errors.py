"""Error types raised or reported by the layer building blocks.

`ShapeMismatchError` is raised eagerly while a network is being assembled
(shape inference and build), so malformed inputs never reach the per-batch
forward pass. `IgnoredParametersWarning` is *returned* by
`Layer.load_parameters` when a layer receives parameters it has no slot for;
callers decide whether to log it, collect it or escalate it.
"""

from typing import Any, Iterable, Optional, Sequence


class ShapeMismatchError(ValueError):
   """
   Raised when an input shape violates the contract of a layer.

   Attributes:
      expected_rank (Optional[int]): Rank the layer accepts, if the failure is a rank mismatch.
      actual_shape (Optional[tuple]): Offending shape as a tuple (None for unknown rank).
      layer_name (str): Name of the layer that rejected the shape.
   """

   def __init__(
      self,
      message: str,
      expected_rank: Optional[int] = None,
      actual_shape: Optional[Sequence] = None,
      layer_name: str = "",
   ) -> None:
      prefix = f"[{layer_name}] " if layer_name else ""
      super().__init__(prefix + message)
      self.expected_rank = expected_rank
      self.actual_shape = tuple(actual_shape) if actual_shape is not None else None
      self.layer_name = layer_name


class IgnoredParametersWarning(UserWarning):
   """Reports parameter keys a layer accepted but did not assign. Keys are kept as strings."""

   def __init__(self, layer_name: str, keys: Iterable[Any]) -> None:
      self.layer_name = layer_name
      self.keys = tuple(sorted(str(key) for key in keys))
      super().__init__(
         f"Layer '{layer_name or '<unnamed>'}' ignored parameters: {', '.join(self.keys)}"
      )
