"""
Pre-made 1D convolutional classifier for multichannel sequences.

The network stacks Conv1D feature extractors, collapses the time axis with
global temporal pooling and finishes with a dense classification head:

   [B,T,C] -> Conv1D blocks -> [B,T,F] -> global pool -> [B,F] -> Dense -> softmax [B,K]
"""

from typing import Sequence, Tuple

import keras
import tensorflow as tf
from keras import layers, Model

from TemporalPool.layers.keras_pooling import KerasGlobalPool1D
from TemporalPool.utils.logger import get_logger

logger = get_logger(__name__)

def build_temporal_cnn(
   input_shape: Tuple[int, int] = (64, 4),
   num_classes: int = 4,
   filters: Sequence[int] = (32, 64),
   kernel_size: int = 3,
   pooling: str = "max",
   dense_units: int = 64,
   dropout_rate: float = 0.0,
) -> Model:
   """
   Build the temporal CNN classifier.
   Args:
      input_shape (Tuple[int, int], optional): (time_steps, channels). time_steps may be None
         for variable-length inputs. Defaults to (64, 4).
      num_classes (int, optional): Number of output classes. Defaults to 4.
      filters (Sequence[int], optional): Conv1D filters per block. Defaults to (32, 64).
      kernel_size (int, optional): Conv1D kernel size. Defaults to 3.
      pooling (str, optional): Global temporal pooling mode, "max" or "avg". Defaults to "max".
      dense_units (int, optional): Units of the hidden dense layer. Defaults to 64.
      dropout_rate (float, optional): Dropout before the hidden dense layer. Defaults to 0.0.
   Returns:
      Model: Uncompiled model mapping sequences [B,T,C] -> class probabilities [B,num_classes].
   """
   if not filters:
      raise ValueError("At least one Conv1D block is required.")
   inputs = keras.Input(shape=input_shape, dtype=tf.float32, name="sequence")

   x = inputs
   for i, ch in enumerate(filters):
      x = layers.Conv1D(
         filters=ch,
         kernel_size=kernel_size,
         padding="same",
         activation="relu",
         name=f"conv_block_{i+1}",
      )(x) # [B,T,ch]

   x = KerasGlobalPool1D(mode=pooling, name=f"global_{pooling}_pool")(x) # [B,ch]

   if dropout_rate > 0:
      x = layers.Dropout(rate=dropout_rate, name="dropout")(x)
   x = layers.Dense(units=dense_units, activation="relu", name="dense")(x) # [B,dense_units]
   outputs = layers.Dense(units=num_classes, activation="softmax", name="class_probs")(x) # [B,num_classes]

   logger.info(
      "Building TemporalCNN with %d conv blocks, %s pooling and %d classes.",
      len(filters), pooling, num_classes,
   )
   return Model(inputs=inputs, outputs=outputs, name="TemporalCNN")
