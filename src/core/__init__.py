"""
Cycle Core - Library infrastructure.

Provides:
- ConfigManager: Configuration with optional persistence and change events
- Signal: Synchronous observer used for every collection and selection event
- setup_logging: Loguru sink configuration

Usage:
    from src.core import get_config, setup_logging

    setup_logging(debug_mode=True)
    get_config().update("cycle", "default_label", "active")
"""
from .config import (
    ConfigManager,
    AppConfig,
    CycleSettings,
    GeneralSettings,
    DEFAULT_LABEL,
    get_config,
    set_config,
)
from .events import Signal, Subscription, SubscriptionGroup
from .logging import setup_logging

__all__ = [
    "ConfigManager",
    "AppConfig",
    "CycleSettings",
    "GeneralSettings",
    "DEFAULT_LABEL",
    "get_config",
    "set_config",
    "Signal",
    "Subscription",
    "SubscriptionGroup",
    "setup_logging",
]
