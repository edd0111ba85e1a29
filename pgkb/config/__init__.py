"""Configuration module - exports Settings and load_config."""

from pgkb.config.loader import load_config
from pgkb.config.settings import Settings

__all__ = ["Settings", "load_config"]
