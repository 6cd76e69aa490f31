"""
Built-in key mapper implementations for lib.map_cache, dood!

A key mapper is any callable taking a cached value and returning its key.
Plain lambdas work fine, but the mappers below cover the most common
cases and have a readable repr(), dood!

Available Mappers:
    - AttributeKeyMapper: Key is an attribute of the value (``value.id``)
    - ItemKeyMapper: Key is an item of a mapping value (``value["id"]``)
    - JsonKeyMapper: JSON serialization (+ optional SHA512 hash) of the value
"""

import hashlib
from typing import Any, Hashable, Mapping, Optional, Sequence

import lib.utils as utils


class AttributeKeyMapper:
    """
    Key mapper reading a single attribute of the value, dood!

    Example:
        >>> mapper = AttributeKeyMapper("id")
        >>> cache = MapCache[int, Person](keyMapper=mapper)
        >>> cache.put(Person(id=17, ...))
        >>> cache.get(17)

    Note:
        Missing attributes are not hidden: AttributeError propagates
        to the caller of the cache operation, dood!
    """

    __slots__ = ("attribute",)

    def __init__(self, attribute: str):
        self.attribute = attribute

    def __call__(self, value: Any) -> Any:
        return getattr(value, self.attribute)

    def __repr__(self) -> str:
        return f"AttributeKeyMapper({self.attribute!r})"


class ItemKeyMapper:
    """
    Key mapper reading a single item of a mapping value, dood!

    Example:
        >>> mapper = ItemKeyMapper("userId")
        >>> mapper({"userId": 123, "name": "Prinny"})  # 123
    """

    __slots__ = ("item",)

    def __init__(self, item: Hashable):
        self.item = item

    def __call__(self, value: Mapping[Any, Any]) -> Any:
        return value[self.item]

    def __repr__(self) -> str:
        return f"ItemKeyMapper({self.item!r})"


class JsonKeyMapper:
    """
    JSON serialization (+ optional SHA512 hash) key mapper, dood!

    Useful when the key of a value is made of several fields. With
    ``fields`` set, only those items of a mapping value take part in the
    key; otherwise the whole value is serialized.

    Example:
        >>> mapper = JsonKeyMapper(fields=["chatId", "userId"])
        >>> mapper({"chatId": 1, "userId": 2, "name": "Prinny"})
        '{"chatId":1,"userId":2}'
        >>>
        >>> # Hashed keys have a fixed length of 128 characters
        >>> mapper = JsonKeyMapper(hash=True)
        >>> len(mapper({"b": 2, "a": 1}))  # 128
    """

    __slots__ = ("fields", "sort_keys", "hash")

    def __init__(self, fields: Optional[Sequence[Hashable]] = None, *, sort_keys: bool = True, hash: bool = False):
        """
        Initialize JsonKeyMapper with configuration options, dood!

        Args:
            fields: Items of a mapping value used to build the key.
                If None, the whole value is serialized.
            sort_keys: Whether to sort JSON keys, so dictionaries with the
                same content produce the same key regardless of order.
            hash: Whether to return SHA512 hash of the JSON string instead
                of the JSON string itself.
        """
        self.fields = tuple(fields) if fields is not None else None
        self.sort_keys = sort_keys
        self.hash = hash

    def __call__(self, value: Any) -> str:
        obj = value
        if self.fields is not None:
            obj = {field: value[field] for field in self.fields}

        try:
            jsonStr = utils.jsonDumps(obj, sort_keys=self.sort_keys)
        except (TypeError, ValueError):
            # Fallback to string representation if JSON serialization fails
            jsonStr = str(obj)

        if self.hash:
            return hashlib.sha512(jsonStr.encode("utf-8")).hexdigest()
        return jsonStr

    def __repr__(self) -> str:
        return f"JsonKeyMapper(fields={self.fields!r}, sort_keys={self.sort_keys}, hash={self.hash})"
