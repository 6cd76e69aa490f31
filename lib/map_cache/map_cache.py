"""
Thread-safe map cache with pluggable key derivation, dood!

MapCache keeps values in a dictionary guarded by a re-entrant lock. Keys
are either given explicitly or derived from the value by a key mapper,
e.g. ``lambda person: person.id``. On top of plain get/put/remove it
offers "load on miss" lookups (default value, loader, custom error) and
predicate based lookup, removal and sub-collection extraction, dood!

Caller supplied callbacks (loaders, suppliers, predicates, error suppliers,
after-insert actions) are never invoked while the lock is held, so they may
be slow, block on I/O or even use the cache themselves.
"""

from threading import RLock
from typing import Dict, Generic, Iterable, List, Optional

from .exceptions import ConfigurationError
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

KEY_MAPPER_NOT_SET = "Key mapper is not set"


class MapCache(Generic[K, V]):
    """
    Generic in-memory key-value cache, safe for use from many threads, dood!

    None is the "absent" marker returned by lookups, so None values can't
    be stored: every write of None raises ValueError.

    Type Parameters:
        K: The key type (any hashable type)
        V: The value type

    Example:
        >>> cache = MapCache[int, Person](keyMapper=lambda p: p.id)
        >>> cache.putAll(people)
        >>> cache.get(17)
        >>> cache.getBy(lambda p: p.age == 20)
        >>> cache.getOrElse(22, loadPersonFromDb)
        >>> women = cache.subListInto(lambda p: p.gender == "F", People)
    """

    def __init__(self, keyMapper: Optional[KeyMapper[V, K]] = None):
        """
        Initialize empty cache, dood!

        Args:
            keyMapper: Function returning the key of a given value.
                May be omitted and set later with setKeyMapper().
        """
        self._entries: Dict[K, V] = {}
        self._keyMapper: Optional[KeyMapper[V, K]] = keyMapper
        self._lock = RLock()

    # ---Key mapper---

    def getKeyMapper(self) -> Optional[KeyMapper[V, K]]:
        """Return the configured key mapper or None."""
        return self._keyMapper

    def setKeyMapper(self, keyMapper: Optional[KeyMapper[V, K]]) -> None:
        """Set (or unset with None) the key mapper used by later operations."""
        self._keyMapper = keyMapper

    def deriveKey(self, value: V) -> K:
        """
        Compute the cache key of ``value`` with the configured key mapper, dood!

        Args:
            value: Value to compute the key for

        Returns:
            K: The key returned by the key mapper (not validated)

        Raises:
            ConfigurationError: If no key mapper is set
        """
        return self._requireKeyMapper()(value)

    # ---Point lookups---

    def get(self, key: K) -> Optional[V]:
        """Return value stored under ``key`` or None."""
        with self._lock:
            return self._entries.get(key)

    def getBy(self, predicate: Predicate[V]) -> Optional[V]:
        """
        Return the first stored value matching ``predicate`` or None, dood!

        Iteration order is unspecified, so if several values match, any of
        them may be returned.
        """
        for value in self._snapshot():
            if predicate(value):
                return value
        return None

    def getOrDefault(self, key: K, defaultValue: V) -> V:
        """
        Return value stored under ``key`` or ``defaultValue``.

        The default value is returned as-is and is not stored in the cache.
        """
        value = self.get(key)
        return defaultValue if value is None else value

    def getOrElse(self, key: K, loader: Loader[K, V]) -> Optional[V]:
        """
        Return value stored under ``key``, loading it on miss, dood!

        On miss ``loader(key)`` is called. A non-None result is stored only
        if no other thread stored a value for ``key`` in the meantime, and
        is returned to the caller either way: under contention the returned
        value isn't necessarily the one kept in the cache.

        Args:
            key: Key of the value to get
            loader: Called with ``key`` on miss, may return None

        Returns:
            Optional[V]: Cached value, loader result or None if the loader
                returned None (nothing is stored then)
        """
        value = self.get(key)
        if value is not None:
            return value

        value = loader(key)
        if value is not None:
            with self._lock:
                self._entries.setdefault(key, value)
        return value

    def getByOrElse(self, predicate: Predicate[V], supplier: Supplier[V]) -> Optional[V]:
        """
        Return the first value matching ``predicate``, supplying it on miss, dood!

        On miss ``supplier()`` is called. A non-None result is stored under
        its derived key if that key is still free, and is returned to the
        caller either way.

        Raises:
            ConfigurationError: If supplier returned a value but no key mapper is set
        """
        value = self.getBy(predicate)
        if value is not None:
            return value

        value = supplier()
        if value is not None:
            key = self.deriveKey(value)
            with self._lock:
                self._entries.setdefault(key, value)
        return value

    def getOrElseThrow(self, key: K, errorSupplier: ErrorSupplier) -> V:
        """
        Return value stored under ``key`` or raise ``errorSupplier()``.

        Raises:
            BaseException: Whatever errorSupplier built, as-is
        """
        value = self.get(key)
        if value is None:
            raise errorSupplier()
        return value

    def getByOrElseThrow(self, predicate: Predicate[V], errorSupplier: ErrorSupplier) -> V:
        """
        Return the first value matching ``predicate`` or raise ``errorSupplier()``.

        Raises:
            BaseException: Whatever errorSupplier built, as-is
        """
        value = self.getBy(predicate)
        if value is None:
            raise errorSupplier()
        return value

    # ---Bulk reads---

    def values(self) -> List[V]:
        """Return a fresh list of all stored values."""
        return self._snapshot()

    def subList(self, predicate: Predicate[V]) -> List[V]:
        """Return a fresh list of all stored values matching ``predicate``."""
        return [value for value in self._snapshot() if predicate(value)]

    def subListInto(self, predicate: Predicate[V], containerFactory: ContainerFactory[V, C]) -> C:
        """
        Return all values matching ``predicate`` in a container built by ``containerFactory``, dood!

        Args:
            predicate: Filter to apply
            containerFactory: Called with an iterable of matching values,
                e.g. ``set``, ``tuple`` or a ``list`` subclass

        Example:
            >>> women = cache.subListInto(lambda p: p.gender == "F", People)
            >>> ids = cache.subListInto(lambda p: p.age > 18, lambda it: {p.id for p in it})
        """
        return containerFactory(self.subList(predicate))

    def size(self) -> int:
        """Return number of stored entries."""
        with self._lock:
            return len(self._entries)

    # ---Writes---

    def put(self, value: V) -> Optional[V]:
        """
        Store ``value`` under its derived key, replacing any existing entry, dood!

        Returns:
            Optional[V]: Replaced value or None

        Raises:
            ConfigurationError: If no key mapper is set
            ValueError: If value is None
        """
        return self._store(self._derivedKeyOf(value), value)

    def putWithKey(self, key: K, value: V) -> Optional[V]:
        """
        Store ``value`` under ``key``, replacing any existing entry.

        Returns:
            Optional[V]: Replaced value or None
        """
        return self._store(key, value)

    def putFrom(self, valueSupplier: Supplier[V]) -> Optional[V]:
        """
        Store the value built by ``valueSupplier`` under its derived key.

        The key mapper is checked before calling the supplier.

        Returns:
            Optional[V]: Replaced value or None
        """
        self._requireKeyMapper()
        return self.put(valueSupplier())

    def putAndThen(self, value: V, afterInsert: AfterInsert[V]) -> V:
        """
        Store ``value`` under its derived key, then call ``afterInsert(value)``, dood!

        Returns:
            V: The stored value
        """
        self.put(value)
        afterInsert(value)
        return value

    def putWithKeyAndThen(self, key: K, value: V, afterInsert: AfterInsertWithKey[K, V]) -> V:
        """
        Store ``value`` under ``key``, then call ``afterInsert(key, value)``.

        Returns:
            V: The stored value
        """
        self._store(key, value)
        afterInsert(key, value)
        return value

    def putFromAndThen(self, valueSupplier: Supplier[V], afterInsert: AfterInsert[V]) -> V:
        """
        Store the value built by ``valueSupplier``, then call ``afterInsert(value)``.

        Returns:
            V: The stored value
        """
        self._requireKeyMapper()
        return self.putAndThen(valueSupplier(), afterInsert)

    def putAll(self, values: Iterable[V], afterEach: Optional[AfterInsert[V]] = None) -> None:
        """
        Store every value under its derived key, in order, dood!

        Later values win on key collision. If ``afterEach`` is given, it is
        called with each value right after that value is stored.

        Raises:
            ConfigurationError: If no key mapper is set (nothing is stored)
        """
        self._requireKeyMapper()
        for value in values:
            self.put(value)
            if afterEach is not None:
                afterEach(value)

    # ---Deletes---

    def remove(self, key: K) -> Optional[V]:
        """Remove entry stored under ``key``, returning its value or None."""
        with self._lock:
            return self._entries.pop(key, None)

    def removeIf(self, predicate: Predicate[V]) -> List[V]:
        """
        Remove all values matching ``predicate``, dood!

        Matching values are found on a snapshot, then each one is removed
        by its derived key only if it is still the value stored there. A
        value replaced by another thread between the scan and the removal
        is left alone and is not reported.

        Returns:
            List[V]: Removed values, in the order they were found

        Raises:
            ConfigurationError: If no key mapper is set (nothing is removed)
        """
        keyMapper = self._requireKeyMapper()
        matches = [(keyMapper(value), value) for value in self.subList(predicate)]

        removed: List[V] = []
        for key, value in matches:
            if self._removeExact(key, value, sameOnly=True):
                removed.append(value)
        return removed

    def removeIfPresent(self, value: V) -> bool:
        """
        Remove entry for the derived key of ``value`` only if it holds ``value``, dood!

        Used to avoid removing a different value which happens to share
        the same key.

        Returns:
            bool: True if the entry was removed

        Raises:
            ConfigurationError: If no key mapper is set
        """
        return self._removeExact(self.deriveKey(value), value)

    # ---Membership---

    def containsKey(self, key: K) -> bool:
        """Check if an entry is stored under ``key``."""
        with self._lock:
            return key in self._entries

    def containsValue(self, value: V) -> bool:
        """Check if any stored value equals ``value``."""
        return any(stored is value or stored == value for stored in self._snapshot())

    # ---Private---

    def _requireKeyMapper(self) -> KeyMapper[V, K]:
        keyMapper = self._keyMapper
        if keyMapper is None:
            raise ConfigurationError(KEY_MAPPER_NOT_SET)
        return keyMapper

    def _derivedKeyOf(self, value: V) -> K:
        self._checkValue(value)
        return self.deriveKey(value)

    def _checkValue(self, value: Optional[V]) -> None:
        if value is None:
            raise ValueError("MapCache can't store None values")

    def _store(self, key: K, value: V) -> Optional[V]:
        self._checkValue(value)
        with self._lock:
            previous = self._entries.get(key)
            self._entries[key] = value
            return previous

    def _removeExact(self, key: K, value: V, sameOnly: bool = False) -> bool:
        # sameOnly: compare by identity, equal-but-replaced values stay
        with self._lock:
            stored = self._entries.get(key)
            if stored is None:
                return False
            if stored is value or (not sameOnly and stored == value):
                del self._entries[key]
                return True
            return False

    def _snapshot(self) -> List[V]:
        with self._lock:
            return list(self._entries.values())
