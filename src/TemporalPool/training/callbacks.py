"""Helper for constructing the standard training callbacks."""

from typing import List
import os

from keras.callbacks import Callback, CSVLogger, EarlyStopping, ModelCheckpoint


def make_callbacks(
   save_dir: str,
   model_name: str = "model",
   patience: int = 3,
   monitor: str = "val_accuracy",
) -> List[Callback]:
   """Create the default set of Keras callbacks for model training. The function
   creates `save_dir` if it does not exist, making it safe to call in fresh
   experiment folders.

   Args:
      save_dir:
         Directory where checkpoints and logs are stored.
      model_name:
         Prefix used to name each saved artifact.
      patience:
         Number of epochs without improvement of `monitor` tolerated by
         `EarlyStopping` before training is halted.
      monitor:
         Metric driving checkpointing and early stopping. Loss-like metrics
         (names ending in "loss") are minimised, everything else maximised.

   Returns:
      List[Callback]
         A list containing, in order:
            1. `ModelCheckpoint` that stores the best model.
            2. `EarlyStopping` that restores the best weights once patience is exhausted.
            3. `CSVLogger` that appends epoch-level metrics to disk.
   """
   os.makedirs(save_dir, exist_ok=True)
   mode = "min" if monitor.endswith("loss") else "max"

   checkpoint_cb = ModelCheckpoint(
      filepath=os.path.join(save_dir, f"{model_name}_best.keras"),
      monitor=monitor,
      mode=mode,
      save_best_only=True,
      save_weights_only=False,
      verbose=1
   )

   earlystop_cb = EarlyStopping(
      monitor=monitor,
      min_delta=0,
      mode=mode,
      patience=patience,
      restore_best_weights=True,
      verbose=1
   )

   csvlogger_cb = CSVLogger(
      filename=os.path.join(save_dir, f"{model_name}_training_log.csv"),
      separator=",",
      append=True
   )

   return [checkpoint_cb, earlystop_cb, csvlogger_cb]
