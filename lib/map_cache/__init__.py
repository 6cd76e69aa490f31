"""
lib.map_cache - Thread-safe in-memory map cache for Gromozeka, dood!

This library provides a generic key-value cache whose keys can be derived
from the cached values themselves, with "load on miss" lookups and
predicate based queries, dood!

Core Components:
- MapCache: Thread-safe dictionary-based cache
- AttributeKeyMapper / ItemKeyMapper / JsonKeyMapper: Ready-made key mappers
- ConfigurationError: Raised when a key mapper is needed but not set

Example Usage:
    >>> from lib.map_cache import AttributeKeyMapper, MapCache
    >>>
    >>> cache = MapCache[int, Person](keyMapper=AttributeKeyMapper("id"))
    >>> cache.putAll(people)
    >>>
    >>> person = cache.getOrElse(22, loadPersonFromDb)
    >>> if person:
    ...     print(f"Found person: {person.firstName}, dood!")
"""

from .exceptions import ConfigurationError, MapCacheError
from .key_mapper import AttributeKeyMapper, ItemKeyMapper, JsonKeyMapper
from .map_cache import MapCache
from .types import (
    AfterInsert,
    AfterInsertWithKey,
    C,
    ContainerFactory,
    ErrorSupplier,
    K,
    KeyMapper,
    Loader,
    Predicate,
    Supplier,
    V,
)

__version__ = "0.1.0"

__all__ = [
    # Core types
    "K",
    "V",
    "C",
    "KeyMapper",
    "Predicate",
    "Loader",
    "Supplier",
    "ErrorSupplier",
    "AfterInsert",
    "AfterInsertWithKey",
    "ContainerFactory",
    # Cache
    "MapCache",
    # Key mappers
    "AttributeKeyMapper",
    "ItemKeyMapper",
    "JsonKeyMapper",
    # Exceptions
    "MapCacheError",
    "ConfigurationError",
]
