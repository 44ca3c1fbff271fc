"""Utility helpers for keeping experiments repeatable.

`set_seeds` applies the same seed value across the Python standard library,
NumPy, TensorFlow and Keras so synthetic data, initializers and shuffling
behave identically across runs.
"""

import os

import keras
import tensorflow as tf

from TemporalPool.utils.logger import get_logger

logger = get_logger(__name__)

def set_seeds(seed: int = 42, deterministic_ops: bool = False) -> None:
   """
   Set seeds for reproducibility across various libraries.
   Args:
      seed (int): The seed value to set.
      deterministic_ops (bool): Also force deterministic TensorFlow kernels (slower).
   """
   logger.info("Setting random seeds to %d", seed)
   os.environ['PYTHONHASHSEED'] = str(seed)
   keras.utils.set_random_seed(seed)
   if deterministic_ops:
      tf.config.experimental.enable_op_determinism()
   logger.debug("Seeds applied to os.environ, random, numpy, tensorflow and keras.")
