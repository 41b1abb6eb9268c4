"""
GQLPorter validation module.

This module provides configuration loading and validation.
"""

from gqlporter.validation.config import BridgeConfig, Config, ConfigError

__all__ = ["BridgeConfig", "Config", "ConfigError"]
