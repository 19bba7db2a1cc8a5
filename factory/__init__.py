"""
This module provides configuration and a factory for creating management API clients.
"""
from .client_factory import ResourceManagerFactory
from .config import config, AppConfig

__all__ = ["ResourceManagerFactory", "config", "AppConfig"]
