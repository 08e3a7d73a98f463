"""Errors raised by the navigation and selection-policy capabilities."""


class CycleError(Exception):
    """Base class for all cycle errors."""
    pass


class NavigationError(CycleError, LookupError):
    """
    Navigation was asked to resolve relative to something that isn't there:
    an item outside the collection, or a label with no current selection.
    """
    pass


class ConfigurationError(CycleError, ValueError):
    """Invalid autoSelect / selectIfRemoved setup options."""
    pass


class MissingArgumentError(CycleError, TypeError):
    """A required setup argument was not passed at all."""
    pass
