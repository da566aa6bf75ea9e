"""Configuration module for Dismal."""

from dismal.config.options import OPTIONS, Option
from dismal.config.schema import Config
from dismal.config.validator import ConfigValidator

__all__ = ["Config", "ConfigValidator", "OPTIONS", "Option"]
