from typing import Optional
import argparse
import os

from TemporalPool.training.train_temporal_cnn import MODEL_NAME, train_temporal_cnn
from TemporalPool.utils.config import load_config
from TemporalPool.utils.logger import add_file_handler, setup_logging
from TemporalPool.utils.path_manager import incremental_path
from TemporalPool.utils.seeds import set_seeds


def main(config_path: Optional[str], save_root: Optional[str], log_level: str = "INFO") -> None:

   # Console logging first so config loading is visible
   logger = setup_logging(level=log_level)

   # Load the configuration file or use default
   config_bundle = load_config(config_path)

   # Setup output directory for the experiment
   save_dir = incremental_path(
      save_dir=save_root or config_bundle.training.save_dir,
      model_name=MODEL_NAME,
      config_name=config_bundle.config_name,
   )

   log_file = add_file_handler(logger, save_dir, log_level)
   logger.info("Logging run to %s (config: %s)", log_file, config_bundle.raw or "defaults")

   # Set random seeds for reproducibility
   set_seeds(config_bundle.training.seed)

   logger.info("Starting training for model: %s, using config: %s", MODEL_NAME, config_bundle.config_name)
   _, _, eval_metrics = train_temporal_cnn(config_bundle, save_dir)
   logger.info("Final test accuracy: %.4f", eval_metrics.get("accuracy", float("nan")))
   logger.info("Artifacts written to %s", os.path.abspath(save_dir))


if __name__ == "__main__":
   parser = argparse.ArgumentParser(description="Train a temporal CNN with global temporal pooling.")
   parser.add_argument(
      "--config",
      type=str,
      default=None,
      help="Path to the YAML/JSON config file. If not provided, default settings are used."
   )
   parser.add_argument(
      "--save-dir",
      type=str,
      default=None,
      help="Root directory for run folders. Defaults to training.save_dir from the config."
   )
   parser.add_argument(
      "--log-level",
      type=str,
      default="INFO",
      help="Logging level (e.g., 'DEBUG', 'INFO')."
   )
   args = parser.parse_args()
   main(args.config, args.save_dir, args.log_level)
