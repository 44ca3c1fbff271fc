"""
End-to-end training workflow for the temporal CNN.

`train_temporal_cnn` covers the full example pipeline: synthetic dataset
creation and train/test split, building the pre-made model, compilation,
training with checkpoint / early-stopping / CSV callbacks and evaluation on
the held-out split. Optimisation, gradients and the training loop itself are
left to Keras.
"""

from typing import Dict, Tuple
import time

import keras

from TemporalPool.data.synthetic import make_datasets
from TemporalPool.models.temporal_cnn import build_temporal_cnn
from TemporalPool.training.callbacks import make_callbacks
from TemporalPool.utils.config import ProjectConfig
from TemporalPool.utils.logger import get_logger

logger = get_logger(__name__)

MODEL_NAME = "TemporalCNN"


def train_temporal_cnn(
   config_bundle: ProjectConfig,
   save_dir: str,
) -> Tuple[keras.Model, keras.callbacks.History, Dict[str, float]]:
   """
   Train and evaluate the temporal CNN described by `config_bundle`.
   Args:
      config_bundle (ProjectConfig): Parsed data/model/training configuration.
      save_dir (str): Directory receiving the best checkpoint and the CSV log.
   Returns:
      Tuple[keras.Model, keras.callbacks.History, Dict[str, float]]: The trained model,
      its training history and the test-split metrics (`loss`, `accuracy`).
   """
   data_cfg = config_bundle.data
   model_cfg = config_bundle.model
   training_cfg = config_bundle.training

   # -----------------------
   # Data
   # -----------------------
   train_ds, test_ds = make_datasets(data_cfg, seed=training_cfg.seed)

   # -----------------------
   # Model
   # -----------------------
   model = build_temporal_cnn(
      input_shape=(data_cfg.time_steps, data_cfg.channels),
      num_classes=data_cfg.num_classes,
      filters=model_cfg.filters,
      kernel_size=model_cfg.kernel_size,
      pooling=model_cfg.pooling,
      dense_units=model_cfg.dense_units,
      dropout_rate=model_cfg.dropout_rate,
   )
   model.summary(print_fn=lambda line, *args, **kwargs: logger.info(line))
   logger.info("Model %s has %d parameters", model.name, int(model.count_params()))

   model.compile(
      optimizer=keras.optimizers.Adam(learning_rate=training_cfg.learning_rate),
      loss=keras.losses.SparseCategoricalCrossentropy(),
      metrics=["accuracy"],
   )

   # -----------------------
   # Training
   # -----------------------
   callbacks = make_callbacks(
      save_dir=save_dir,
      model_name=MODEL_NAME,
      patience=training_cfg.patience,
      monitor=training_cfg.monitor,
   )
   logger.info("Starting training for %d epochs; artifacts in %s", training_cfg.epochs, save_dir)
   t0 = time.time()
   history = model.fit(
      train_ds,
      validation_data=test_ds,
      epochs=training_cfg.epochs,
      callbacks=callbacks,
      verbose=2,
   )
   logger.info("Training finished in %.2f sec", time.time() - t0)

   # -----------------------
   # Evaluation
   # -----------------------
   eval_metrics = model.evaluate(test_ds, return_dict=True, verbose=0)
   eval_metrics = {key: float(value) for key, value in eval_metrics.items()}
   logger.info("Test metrics: %s", eval_metrics)
   return model, history, eval_metrics
