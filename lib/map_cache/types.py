"""
Core type definitions for lib.map_cache, dood!

This module contains the type variables and callable aliases used
throughout the map cache library. Every callback the cache accepts is
described here, so signatures in MapCache stay readable, dood!
"""

from typing import Any, Callable, Iterable, TypeVar

# Type variables for generic cache operations, dood!
K = TypeVar("K")  # Key type - must be hashable
V = TypeVar("V")  # Value type - can be any type except None
C = TypeVar("C")  # Container type produced by subListInto()

KeyMapper = Callable[[V], K]
"""Pure function computing the cache key of a value, e.g. ``lambda p: p.id``"""

Predicate = Callable[[V], bool]
"""Filter applied to cached values"""

Loader = Callable[[K], V | None]
"""Called with the missing key, returns the value to cache or None"""

Supplier = Callable[[], V | None]
"""Produces a value on demand (e.g. fetched from a database)"""

ErrorSupplier = Callable[[], BaseException]
"""Builds the exception raised by the getOrElseThrow() family"""

AfterInsert = Callable[[V], Any]
"""Called with the value right after it was stored"""

AfterInsertWithKey = Callable[[K, V], Any]
"""Called with the key and value right after they were stored"""

ContainerFactory = Callable[[Iterable[V]], C]
"""Builds a container from matching values: list, set, tuple, list subclasses..."""
