"""
Configuration management for the Stormpath SDK.
"""

from .settings import SdkConfig, ApiKeyConfig, WebConfig, LogLevel
from .environment import EnvironmentLoader
from .validation import ConfigValidator
from .logging import setup_logging
from . import system_properties

__all__ = [
    'SdkConfig',
    'ApiKeyConfig',
    'WebConfig',
    'LogLevel',
    'EnvironmentLoader',
    'ConfigValidator',
    'setup_logging',
    'system_properties',
]
