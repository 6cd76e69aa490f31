"""
Map cache exceptions

This module defines the exception hierarchy for lib.map_cache.
All cache-related errors inherit from MapCacheError base class.
Errors raised by caller-supplied callbacks are never wrapped, dood!
"""


class MapCacheError(Exception):
    """
    Base exception for all map cache errors.

    Catch this to handle any map cache error generically.
    """

    pass


class ConfigurationError(MapCacheError):
    """
    Exception raised when the cache is not configured for the requested operation.

    Raised whenever an operation needs to derive a key from a value but
    no key mapper was set, either in the constructor or via setKeyMapper().
    This is a setup defect: set the key mapper and retry, dood!

    Args:
        message: Description of the configuration error
    """

    pass
