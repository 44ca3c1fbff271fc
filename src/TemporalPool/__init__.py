"""TemporalPool package exposes layers, network assembly, models, data, training, and utils modules."""

# Ensures namespace package creation for editable installs.
__all__ = ["data", "layers", "models", "network", "training", "utils"]
