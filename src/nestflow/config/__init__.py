"""Configuration module for Nestflow."""

from nestflow.config.compiler import compile_config, validate_config
from nestflow.config.loader import ConfigLoader
from nestflow.config.models import (
    BranchConfig,
    FlowConfig,
    NestflowConfig,
    NodeConfig,
    SettingsConfig,
)
from nestflow.config.registry import HandlerRegistry

__all__ = [
    "ConfigLoader",
    "HandlerRegistry",
    "compile_config",
    "validate_config",
    "NestflowConfig",
    "NodeConfig",
    "FlowConfig",
    "BranchConfig",
    "SettingsConfig",
]
