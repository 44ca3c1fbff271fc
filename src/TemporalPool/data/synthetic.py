"""
Synthetic multichannel sequence datasets for the example training workflow.

Each sample is low-amplitude Gaussian noise of shape `[time_steps, channels]`
with one spike: a sample of class `k` has its spike in channel
`k % channels` at a random time step. The position is random, so a model has
to aggregate over the whole time axis, which is exactly what global temporal
pooling does.
"""

from typing import Tuple

import numpy as np
import tensorflow as tf

from TemporalPool.utils.config import DataConfig
from TemporalPool.utils.logger import get_logger

logger = get_logger(__name__)

SPIKE_AMPLITUDE = 3.0
NOISE_STD = 0.1


def make_synthetic_sequences(
   num_samples: int,
   time_steps: int,
   channels: int,
   num_classes: int,
   seed: int = 42,
) -> Tuple[np.ndarray, np.ndarray]:
   """
   Generate labelled spike sequences.
   Args:
      num_samples (int): Number of sequences.
      time_steps (int): Length of each sequence.
      channels (int): Features per time step.
      num_classes (int): Number of classes; labels are drawn uniformly.
      seed (int, optional): Seed of the NumPy generator. Defaults to 42.
   Returns:
      Tuple[np.ndarray, np.ndarray]: `x` float32 [N,T,C] and `y` int32 [N].
   """
   if min(num_samples, time_steps, channels, num_classes) < 1:
      raise ValueError("num_samples, time_steps, channels and num_classes must all be >= 1.")
   rng = np.random.default_rng(seed)
   x = rng.normal(0.0, NOISE_STD, size=(num_samples, time_steps, channels)).astype(np.float32)
   y = rng.integers(0, num_classes, size=num_samples).astype(np.int32)
   spike_t = rng.integers(0, time_steps, size=num_samples)
   x[np.arange(num_samples), spike_t, y % channels] += SPIKE_AMPLITUDE
   return x, y


def make_datasets(data_cfg: DataConfig, seed: int = 42) -> Tuple[tf.data.Dataset, tf.data.Dataset]:
   """
   Build shuffled train/test `tf.data` pipelines split by `data_cfg.train_test_split`.
   Args:
      data_cfg (DataConfig): Dataset configuration.
      seed (int, optional): Seed for generation and shuffling. Defaults to 42.
   Returns:
      Tuple[tf.data.Dataset, tf.data.Dataset]: Batched (train, test) datasets of `(x, y)` pairs.
   """
   if not 0.0 < data_cfg.train_test_split < 1.0:
      raise ValueError(f"train_test_split must be in (0, 1), got {data_cfg.train_test_split}")
   x, y = make_synthetic_sequences(
      num_samples=data_cfg.num_samples,
      time_steps=data_cfg.time_steps,
      channels=data_cfg.channels,
      num_classes=data_cfg.num_classes,
      seed=seed,
   )
   num_train = int(round(data_cfg.num_samples * data_cfg.train_test_split))
   if num_train == 0 or num_train == data_cfg.num_samples:
      raise ValueError(
         f"Split {data_cfg.train_test_split} of {data_cfg.num_samples} samples leaves one side empty."
      )

   dataset = tf.data.Dataset.from_tensor_slices((x, y)).shuffle(
      buffer_size=data_cfg.shuffle_buffer, seed=seed, reshuffle_each_iteration=False
   )
   train_ds = dataset.take(num_train).batch(data_cfg.batch_size).prefetch(tf.data.AUTOTUNE)
   test_ds = dataset.skip(num_train).batch(data_cfg.test_batch_size).prefetch(tf.data.AUTOTUNE)
   logger.info(
      "Prepared synthetic datasets: %d train / %d test samples of shape (%d, %d)",
      num_train, data_cfg.num_samples - num_train, data_cfg.time_steps, data_cfg.channels,
   )
   return train_ds, test_ds
