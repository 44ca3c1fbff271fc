"""Helpers for creating per-run experiment output folders.

``incremental_path`` guarantees that every run gets its own directory by
enumerating suffixed folders under a ``model/config`` hierarchy, so training
runs never overwrite each other's checkpoints and logs.
"""

import os


def incremental_path(save_dir: str, model_name: str = "model", config_name: str = "default") -> str:
   """Return a fresh run directory path for the given model/config combination.

   The function builds ``<save_dir>/<model_name>/<config_name>/`` and then
   searches for the first folder named ``{model_name}_{config_name}_{nn}``
   (``nn`` is zero-padded) that does not yet exist. The folder is created on the
   fly and the full path is returned.

   Args:
      save_dir: Root directory where all experiment artifacts are stored.
      model_name: Identifier for the model architecture.
      config_name: Identifier for the configuration file.

   Returns:
      The path to a newly created, unique run directory.

   Raises:
      RuntimeError: If 98 folders already exist for the same model/config combination.
   """
   head_folder = os.path.join(save_dir, model_name, config_name)
   os.makedirs(head_folder, exist_ok=True)

   for n in range(1, 99):
      save_folder = os.path.join(head_folder, f"{model_name}_{config_name}_{n:02d}")
      if not os.path.exists(save_folder):
         os.makedirs(save_folder)
         return save_folder

   raise RuntimeError(f"Too many folders created for {model_name}/{config_name}")
