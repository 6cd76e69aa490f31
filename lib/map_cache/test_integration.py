"""
Integration tests for lib.map_cache, dood!

These tests validate real-world usage patterns:
- Many threads racing on the same miss
- Concurrent readers and writers
- End-to-end lookup scenario on a cache of records keyed by id
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List

from . import AttributeKeyMapper, MapCache


@dataclass
class Record:
    id: int
    name: str
    tags: List[str] = field(default_factory=list)


THREADS = 16


class TestConcurrentMiss:
    """Test insert-if-absent under contention, dood!"""

    def test_racing_loaders_store_exactly_one_value(self):
        """Test that N threads missing on the same key keep exactly one value, dood!"""
        cache = MapCache[int, Record](keyMapper=AttributeKeyMapper("id"))
        barrier = threading.Barrier(THREADS)

        def worker(workerId: int) -> Record:
            def loader(key: int) -> Record:
                # Make sure every thread is inside the loader at the same time
                barrier.wait(timeout=10)
                return Record(key, f"loaded-by-{workerId}")

            return cache.getOrElse(42, loader)

        with ThreadPoolExecutor(max_workers=THREADS) as executor:
            results = list(executor.map(worker, range(THREADS)))

        # Every caller gets the value it computed itself
        assert [record.name for record in results] == [f"loaded-by-{i}" for i in range(THREADS)]

        # And only one of them is kept
        assert cache.size() == 1
        stored = cache.get(42)
        assert stored is not None
        assert sum(1 for record in results if record is stored) == 1

    def test_racing_suppliers_store_exactly_one_value(self):
        """Test predicate miss race keeps one value per derived key, dood!"""
        cache = MapCache[int, Record](keyMapper=AttributeKeyMapper("id"))
        barrier = threading.Barrier(THREADS)

        def worker(workerId: int) -> Record:
            def supplier() -> Record:
                barrier.wait(timeout=10)
                return Record(7, f"supplied-by-{workerId}")

            return cache.getByOrElse(lambda record: record.id == 7, supplier)

        with ThreadPoolExecutor(max_workers=THREADS) as executor:
            results = list(executor.map(worker, range(THREADS)))

        assert cache.size() == 1
        assert sum(1 for record in results if record is cache.get(7)) == 1


class TestConcurrentAccess:
    """Test concurrent readers and writers, dood!"""

    def test_concurrent_writers_and_scanners(self):
        """Test that scans never fail while other threads write, dood!"""
        cache = MapCache[int, Record](keyMapper=AttributeKeyMapper("id"))
        stop = threading.Event()
        errors: List[BaseException] = []

        def writer(workerId: int) -> None:
            try:
                for i in range(500):
                    key = workerId * 1000 + i
                    cache.put(Record(key, "w"))
                    if i % 3 == 0:
                        cache.remove(key)
            except BaseException as e:
                errors.append(e)

        def scanner() -> None:
            try:
                while not stop.is_set():
                    cache.subList(lambda record: record.id % 2 == 0)
                    cache.getBy(lambda record: record.name == "nothing")
                    cache.values()
                    cache.containsValue(Record(-1, "nothing"))
            except BaseException as e:
                errors.append(e)

        scanners = [threading.Thread(target=scanner) for _ in range(4)]
        for thread in scanners:
            thread.start()

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(writer, range(8)))

        stop.set()
        for thread in scanners:
            thread.join(timeout=10)

        assert errors == []
        # 500 puts per writer, every third one removed again
        assert cache.size() == 8 * (500 - 167)

    def test_concurrent_put_all_and_remove_if(self):
        """Test that removeIf only reports values it actually removed, dood!"""
        cache = MapCache[int, Record](keyMapper=AttributeKeyMapper("id"))
        cache.putAll(Record(i, "old") for i in range(1000))
        removedTotal: List[Record] = []
        lock = threading.Lock()

        def remover() -> None:
            removed = cache.removeIf(lambda record: record.name == "old")
            with lock:
                removedTotal.extend(removed)

        threads = [threading.Thread(target=remover) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        # Each value is reported by exactly one remover
        assert sorted(record.id for record in removedTotal) == list(range(1000))
        assert cache.size() == 0

    def test_callbacks_may_use_cache(self):
        """Test that callbacks run outside of the internal lock, dood!"""
        cache = MapCache[int, Record](keyMapper=AttributeKeyMapper("id"))
        cache.put(Record(1, "one"))

        def loader(key: int) -> Record:
            # Would deadlock if the lock were held by another thread here
            result: List[int] = []
            thread = threading.Thread(target=lambda: result.append(cache.size()))
            thread.start()
            thread.join(timeout=10)
            return Record(key, f"size-{result[0]}")

        assert cache.getOrElse(2, loader) == Record(2, "size-1")


class TestEndToEndScenario:
    """Test full lookup scenario on records keyed by id, dood!"""

    def test_scenario(self):
        cache = MapCache[int, Record]()
        cache.setKeyMapper(lambda record: record.id)

        cache.putAll([Record(i, f"name-{i}") for i in range(1, 21)])
        assert cache.size() == 20

        assert cache.get(17) == Record(17, "name-17")
        assert cache.getBy(lambda record: record.name == "name-5") == Record(5, "name-5")

        fallback = Record(21, "fallback")
        assert cache.getOrDefault(21, fallback) is fallback
        assert cache.size() == 20

        loaderCalls: List[int] = []

        def loader(key: int) -> Record:
            loaderCalls.append(key)
            return Record(key, f"loaded-{key}")

        loaded = cache.getOrElse(22, loader)
        assert loaded == Record(22, "loaded-22")
        assert cache.size() == 21

        assert cache.getOrElse(22, loader) is loaded
        assert loaderCalls == [22]
