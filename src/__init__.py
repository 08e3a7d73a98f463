"""
Cycle Select - Navigation and automatic selection for ordered collections.

Adds looped/bounded navigation and label-scoped auto-selection
(on populate and on removal) to observable single-selection collections.
"""

# Core systems
from src.core.config import ConfigManager, AppConfig, CycleSettings, GeneralSettings, get_config
from src.core.events import Signal, Subscription, SubscriptionGroup
from src.core.logging import setup_logging

# Host framework
from src.models import SelectableItem, SelectOneCollection, DeselectCause, DeselectContext

# Capabilities
from src.cycle import (
    CycleCollection,
    CycleItem,
    apply_navigation,
    apply_selection_policy,
    CycleError,
    ConfigurationError,
    MissingArgumentError,
    NavigationError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "ConfigManager",
    "AppConfig",
    "CycleSettings",
    "GeneralSettings",
    "get_config",
    "Signal",
    "Subscription",
    "SubscriptionGroup",
    "setup_logging",
    # Host framework
    "SelectableItem",
    "SelectOneCollection",
    "DeselectCause",
    "DeselectContext",
    # Capabilities
    "CycleCollection",
    "CycleItem",
    "apply_navigation",
    "apply_selection_policy",
    "CycleError",
    "ConfigurationError",
    "MissingArgumentError",
    "NavigationError",
]
