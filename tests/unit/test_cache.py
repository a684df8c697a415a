"""
Unit Tests for the Evaluation Cache

Tests for input hashing and the LRU read-through cache.
"""
import threading

from fertility.services import EvaluationCache, input_hash
from fertility.core.validation import normalize_input


class TestInputHash:
    """Tests for the normalized-input hash."""

    def test_stable(self, make_patient):
        assert input_hash(make_patient()) == input_hash(make_patient())

    def test_sensitive_to_values(self, make_patient):
        assert input_hash(make_patient()) != input_hash(make_patient(amh=2.6))

    def test_equivalent_raw_inputs_share_hash(self):
        """Different spellings of the same intake normalize to one key."""
        a = normalize_input({"age": "32", "hsg_result": "Normal", "amh": "2,5"}).patient
        b = normalize_input({"age": 32, "hsg_result": "normal", "amh": 2.5}).patient
        assert input_hash(a) == input_hash(b)

    def test_hex_digest(self, make_patient):
        digest = input_hash(make_patient())
        assert len(digest) == 64
        int(digest, 16)


class TestEvaluationCache:
    """Tests for the LRU cache."""

    def test_miss_then_hit(self, cache):
        calls = []

        def compute():
            calls.append(1)
            return "result"

        assert cache.get_or_compute("k", compute) == "result"
        assert cache.get_or_compute("k", compute) == "result"
        assert len(calls) == 1
        assert cache.hits == 1
        assert cache.misses == 1

    def test_lru_eviction(self):
        cache = EvaluationCache(max_entries=2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")
        cache.put("c", 3)
        assert "a" in cache
        assert "b" not in cache
        assert len(cache) == 2

    def test_clear(self, cache):
        cache.put("a", 1)
        cache.get("a")
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0

    def test_default_size_from_config(self):
        from fertility import config
        assert EvaluationCache().max_entries == max(1, config.CACHE_MAX_ENTRIES)

    def test_concurrent_access(self, cache):
        """Parallel writers never corrupt the cache."""
        def worker(n):
            for i in range(50):
                cache.put(f"{n}-{i}", i)
                cache.get(f"{n}-{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(cache) == cache.max_entries
