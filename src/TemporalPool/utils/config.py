"""Utilities for loading experiment configuration.

Configuration files are organised into top-level sections ``data:``,
``model:`` and ``training:``. This module defines lightweight dataclasses for
those sections and provides helpers to load them from YAML/JSON files. The
main entry point, :func:`load_config`, returns a ``ProjectConfig`` bundle that
exposes the parsed dataclasses while keeping the raw mapping available for
callers that need direct access to other keys.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, get_args, get_origin
import json
import logging

import yaml

from TemporalPool.utils.logger import get_logger

CONFIG_BASE_DIR = Path("experiments/configs")

@dataclass
class DataConfig:
   """
   Configuration of the synthetic sequence dataset.
   Attributes:
      num_samples (int): Total number of generated sequences.
      time_steps (int): Length of the time axis.
      channels (int): Features per time step.
      num_classes (int): Number of target classes.
      batch_size (int): Batch size of the training split.
      test_batch_size (int): Batch size of the test split.
      train_test_split (float): Fraction of samples used for training.
      shuffle_buffer (int): Buffer size for shuffling before the split.
   """
   num_samples: int = 512
   time_steps: int = 64
   channels: int = 4
   num_classes: int = 4
   batch_size: int = 32
   test_batch_size: int = 16
   train_test_split: float = 0.8
   shuffle_buffer: int = 1024

@dataclass
class ModelConfig:
   filters: list[int] = field(default_factory=lambda: [32, 64])
   kernel_size: int = 3
   pooling: str = "max"             # Options: 'max', 'avg'
   dense_units: int = 64
   dropout_rate: float = 0.0

@dataclass
class TrainingConfig:
   epochs: int = 10
   patience: int = 3                # Early stopping patience
   learning_rate: float = 0.001
   monitor: str = "val_accuracy"
   seed: int = 42
   save_dir: str = "experiments/checkpoints"

@dataclass
class ProjectConfig:
   data: DataConfig
   model: ModelConfig
   training: TrainingConfig
   raw: Dict[str, Any]
   config_name: str = "default"


def _ensure_mapping(section: Any, section_name: str, path_obj: Path) -> Dict[str, Any]:
   if section is None:
      return {}
   if not isinstance(section, dict):
      raise ValueError(
         f"Section '{section_name}' in {path_obj} must be a mapping, got {type(section).__name__}."
      )
   return section


def _coerce_to_field_type(value: Any, field_type: Any) -> Any:
   """Best-effort conversion of a YAML/JSON value to a dataclass field type.

   List fields also accept a scalar (``filters: 32``). Numbers given as strings
   are parsed; a float is never truncated into an int field. Values that cannot
   be converted are returned unchanged so the dataclass keeps the raw input.
   """
   if get_origin(field_type) is list:
      items = value if isinstance(value, (list, tuple)) else [value]
      item_type = (get_args(field_type) or (Any,))[0]
      return [_coerce_to_field_type(item, item_type) for item in items]
   if field_type in (int, float) and not isinstance(value, bool):
      try:
         converted = field_type(value)
      except (TypeError, ValueError):
         return value
      if isinstance(value, float) and converted != value:
         return value
      return converted
   if field_type is str and isinstance(value, str):
      return value.strip()
   return value


def _filter_known_fields(
   section: Dict[str, Any],
   dataclass_type: type,
   section_name: str,
   logger: logging.Logger,
   path_obj: Path,
) -> Dict[str, Any]:
   field_map = {dataclass_field.name: dataclass_field for dataclass_field in fields(dataclass_type)}
   filtered_section = {}
   for key, value in section.items():
      if key in field_map:
         filtered_section[key] = _coerce_to_field_type(value, field_map[key].type)
   ignored_keys = set(section) - set(field_map)
   if ignored_keys:
      logger.warning(
         "Ignoring unsupported %s config keys in %s: %s",
         section_name,
         path_obj,
         ", ".join(sorted(ignored_keys)),
      )
   return filtered_section


def load_config(path: Optional[str] = None) -> ProjectConfig:
   """
   Load configuration from a YAML or JSON file.
   Args:
      path (Optional[str]): Path to the configuration file. Relative paths that do not
         exist are looked up under ``experiments/configs``. If None, returns defaults.
   Returns:
      ProjectConfig: Bundle containing parsed data/model/training sections and the raw mapping.
   Raises:
      FileNotFoundError: If the file cannot be found.
      ValueError: If the file or one of its sections is not a mapping.
   """
   logger = get_logger(__name__)
   if path is None:
      logger.info("No config path provided; using defaults.")
      return ProjectConfig(
         data=DataConfig(),
         model=ModelConfig(),
         training=TrainingConfig(),
         raw={},
      )
   path_obj = Path(path)
   if not path_obj.is_absolute() and not path_obj.exists():
      path_obj = CONFIG_BASE_DIR / path_obj
   if not path_obj.exists():
      raise FileNotFoundError(f"Config file not found: {path}")
   if path_obj.suffix in {".yaml", ".yml"}:
      logger.info("Loading YAML config: %s", path_obj)
      with path_obj.open("r") as f:
         config_dict = yaml.safe_load(f)
   else:
      logger.info("Loading JSON config: %s", path_obj)
      with path_obj.open("r") as f:
         config_dict = json.load(f)
   logger.debug("Config loaded: %s", config_dict)
   if config_dict is None:
      config_dict = {}
   if not isinstance(config_dict, dict):
      raise ValueError(f"Configuration at {path_obj} must be a mapping.")

   data_section = _ensure_mapping(config_dict.get("data", {}), "data", path_obj)
   model_section = _ensure_mapping(config_dict.get("model", {}), "model", path_obj)
   training_section = _ensure_mapping(config_dict.get("training", {}), "training", path_obj)

   return ProjectConfig(
      data=DataConfig(**_filter_known_fields(data_section, DataConfig, "data", logger, path_obj)),
      model=ModelConfig(**_filter_known_fields(model_section, ModelConfig, "model", logger, path_obj)),
      training=TrainingConfig(
         **_filter_known_fields(training_section, TrainingConfig, "training", logger, path_obj)
      ),
      raw=config_dict,
      config_name=path_obj.stem,
   )
