"""Configuration module for the directory console."""
from .settings import AppConfig, ValidationRules, load_settings

__all__ = ["AppConfig", "ValidationRules", "load_settings"]
