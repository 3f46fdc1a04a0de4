"""Tests for TypedCacheAdapter."""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from neo_caches.application.services import TypedCacheAdapter, create_typed_cache_adapter
from neo_caches.application.services.null_marker import NULL_MARKER
from neo_caches.core.exceptions import (
    CacheConflict,
    CacheItemNotFound,
    CacheTypeMismatch,
    InvalidCacheArgument,
)
from neo_caches.core.protocols import CachesObjects
from neo_caches.core.value_objects import AggregatingKey, CachePolicy, KeyedCacheItem

from conftest import Person, PersonKey


class NoneKey:
    def render(self):
        return None


class TestTypedCacheAdapterBasics:
    """Test cases for add, get and remove."""

    def test_add_then_get(self, person_cache, sample_person):
        """Test stored value is returned by get."""
        person_cache.add(PersonKey(1), sample_person)

        assert person_cache.get(PersonKey(1)) == sample_person
        assert person_cache.contains(PersonKey(1))

    def test_add_existing_raises_conflict(self, person_cache, sample_person):
        """Test add on an occupied key raises CacheConflict."""
        person_cache.add(PersonKey(1), sample_person)

        with pytest.raises(CacheConflict) as exc_info:
            person_cache.add(PersonKey(1), Person("Grace", "Hopper"))

        assert exc_info.value.cache_key == "person|1"
        assert person_cache.get(PersonKey(1)) == sample_person

    def test_try_add(self, person_cache, sample_person):
        """Test try_add reports whether the value was stored."""
        assert person_cache.try_add(PersonKey(1), sample_person) is True
        assert person_cache.try_add(PersonKey(1), Person("Grace", "Hopper")) is False
        assert person_cache.get(PersonKey(1)) == sample_person

    def test_add_or_replace(self, person_cache, sample_person):
        """Test add_or_replace overwrites an existing entry."""
        replacement = Person("Grace", "Hopper")
        person_cache.add(PersonKey(1), sample_person)
        person_cache.add_or_replace(PersonKey(1), replacement)

        assert person_cache.get(PersonKey(1)) == replacement

    def test_get_missing_raises_not_found(self, person_cache):
        """Test get on a missing key raises CacheItemNotFound."""
        with pytest.raises(CacheItemNotFound) as exc_info:
            person_cache.get(PersonKey(404))

        assert exc_info.value.cache_key == "person|404"

    def test_try_get(self, person_cache, sample_person):
        """Test try_get returns a found flag with the value."""
        assert person_cache.try_get(PersonKey(1)) == (False, None)

        person_cache.add(PersonKey(1), sample_person)

        assert person_cache.try_get(PersonKey(1)) == (True, sample_person)

    def test_remove(self, person_cache, sample_person):
        """Test remove reports whether an entry was removed."""
        person_cache.add(PersonKey(1), sample_person)

        assert person_cache.remove(PersonKey(1)) is True
        assert person_cache.remove(PersonKey(1)) is False
        assert not person_cache.contains(PersonKey(1))

    def test_aggregating_keys(self, memory_store):
        """Test aggregating keys address entries by rendered value."""
        cache = TypedCacheAdapter(memory_store)
        cache.add(AggregatingKey.of("order", 7, "lines"), [1, 2])

        assert cache.get(AggregatingKey.of("order", 7, "lines")) == [1, 2]
        assert memory_store.get("order|7|lines") == [1, 2]

    def test_satisfies_caches_objects(self, person_cache):
        """Test adapter satisfies the CachesObjects protocol."""
        assert isinstance(person_cache, CachesObjects)

    def test_factory_function(self, memory_store):
        """Test create_typed_cache_adapter wires arguments through."""
        cache = create_typed_cache_adapter(memory_store, region=None, value_type=Person)

        assert cache.store is memory_store
        assert cache.region is None


class TestTypedCacheAdapterValidation:
    """Test cases for argument validation."""

    def test_none_store_rejected(self):
        """Test adapter requires a store."""
        with pytest.raises(InvalidCacheArgument):
            TypedCacheAdapter(None)

    def test_none_key_rejected(self, person_cache, sample_person):
        """Test None keys raise InvalidCacheArgument."""
        with pytest.raises(InvalidCacheArgument):
            person_cache.get(None)
        with pytest.raises(InvalidCacheArgument):
            person_cache.add(None, sample_person)

    def test_key_rendering_none_rejected(self, person_cache):
        """Test keys that render None raise InvalidCacheArgument."""
        with pytest.raises(InvalidCacheArgument) as exc_info:
            person_cache.contains(NoneKey())

        assert exc_info.value.error_code == "CACHE_KEY_RENDERED_NONE"

    def test_none_keys_collection_rejected(self, person_cache):
        """Test get_many requires a key collection."""
        with pytest.raises(InvalidCacheArgument):
            person_cache.get_many(None)

    def test_none_factory_rejected(self, person_cache):
        """Test get_or_add requires a factory."""
        with pytest.raises(InvalidCacheArgument):
            person_cache.get_or_add(PersonKey(1), None)


class TestTypedCacheAdapterNullValues:
    """Test cases for caching None."""

    def test_cached_none_is_distinct_from_absent(self, person_cache, memory_store):
        """Test a cached None is found and read back as None."""
        person_cache.add(PersonKey(1), None)

        assert person_cache.contains(PersonKey(1))
        assert person_cache.try_get(PersonKey(1)) == (True, None)
        assert person_cache.get(PersonKey(1)) is None
        assert memory_store.get("person|1") is NULL_MARKER

    def test_cached_none_conflicts_with_add(self, person_cache, sample_person):
        """Test a cached None occupies the key."""
        person_cache.add(PersonKey(1), None)

        with pytest.raises(CacheConflict):
            person_cache.add(PersonKey(1), sample_person)

    def test_remove_cached_none(self, person_cache):
        """Test removing a cached None reports a removal."""
        person_cache.add(PersonKey(1), None)

        assert person_cache.remove(PersonKey(1)) is True

    def test_get_or_add_keeps_cached_none(self, person_cache):
        """Test a cached None satisfies get_or_add without calling the factory."""
        person_cache.add(PersonKey(1), None)
        factory = MagicMock(return_value=Person("Grace", "Hopper"))

        assert person_cache.get_or_add(PersonKey(1), factory) is None
        factory.assert_not_called()

    def test_get_or_add_caches_none_result(self, person_cache):
        """Test a factory returning None is cached."""
        factory = MagicMock(return_value=None)

        assert person_cache.get_or_add(PersonKey(1), factory) is None
        assert person_cache.get_or_add(PersonKey(1), factory) is None
        factory.assert_called_once_with(PersonKey(1))


class TestTypedCacheAdapterTypeChecks:
    """Test cases for runtime value type checks."""

    def test_get_mismatched_payload(self, person_cache, memory_store):
        """Test get raises CacheTypeMismatch for a foreign payload."""
        memory_store.set("person|1", "not a person")

        with pytest.raises(CacheTypeMismatch) as exc_info:
            person_cache.get(PersonKey(1))

        assert exc_info.value.expected is Person
        assert exc_info.value.actual is str

    def test_try_get_mismatched_payload(self, person_cache, memory_store):
        """Test try_get propagates CacheTypeMismatch."""
        memory_store.set("person|1", 12)

        with pytest.raises(CacheTypeMismatch):
            person_cache.try_get(PersonKey(1))

    def test_tuple_of_types(self, memory_store):
        """Test value_type accepts a tuple of classes."""
        cache = TypedCacheAdapter(memory_store, value_type=(int, float))
        cache.add(PersonKey(1), 1)
        cache.add(PersonKey(2), 2.5)

        assert cache.get(PersonKey(1)) == 1
        assert cache.get(PersonKey(2)) == 2.5

    def test_no_value_type_accepts_anything(self, memory_store):
        """Test checks are skipped without value_type."""
        cache = TypedCacheAdapter(memory_store)
        memory_store.set("person|1", "text")

        assert cache.get(PersonKey(1)) == "text"


class TestTypedCacheAdapterGetMany:
    """Test cases for batch get."""

    def test_returns_present_keys_only(self, person_cache, sample_person):
        """Test missing keys are left out."""
        grace = Person("Grace", "Hopper")
        person_cache.add(PersonKey(1), sample_person)
        person_cache.add(PersonKey(2), grace)

        results = person_cache.get_many([PersonKey(1), PersonKey(2), PersonKey(3)])

        assert sorted(results, key=lambda item: item.key.person_id) == [
            KeyedCacheItem(PersonKey(1), sample_person),
            KeyedCacheItem(PersonKey(2), grace),
        ]

    def test_includes_cached_none(self, person_cache):
        """Test cached None values are reported."""
        person_cache.add(PersonKey(1), None)

        assert person_cache.get_many([PersonKey(1)]) == [KeyedCacheItem(PersonKey(1), None)]

    def test_duplicate_keys_collapsed(self, person_cache, sample_person):
        """Test a key requested twice is reported once."""
        person_cache.add(PersonKey(1), sample_person)

        results = person_cache.get_many([PersonKey(1), PersonKey(1)])

        assert results == [KeyedCacheItem(PersonKey(1), sample_person)]

    def test_empty_keys(self, person_cache):
        """Test an empty key list gives an empty result."""
        assert person_cache.get_many([]) == []

    def test_skips_mismatched_payload(self, person_cache, memory_store, sample_person, caplog):
        """Test type mismatches are skipped and logged."""
        person_cache.add(PersonKey(1), sample_person)
        memory_store.set("person|2", "not a person")

        with caplog.at_level(logging.WARNING):
            results = person_cache.get_many([PersonKey(1), PersonKey(2)])

        assert results == [KeyedCacheItem(PersonKey(1), sample_person)]
        assert "person|2" in caplog.text


class TestTypedCacheAdapterPolicy:
    """Test cases for expiration policy handling."""

    def test_policy_provider_receives_key_and_value(self, sample_person):
        """Test the provider's policy is passed to the store."""
        store = MagicMock()
        store.add.return_value = True
        policy = CachePolicy.sliding(timedelta(minutes=1))
        provider = MagicMock(return_value=policy)
        cache = TypedCacheAdapter(store, policy_provider=provider, region="people")

        cache.add(PersonKey(1), sample_person)

        provider.assert_called_once_with(PersonKey(1), sample_person)
        store.add.assert_called_once_with("person|1", sample_person, policy, region="people")

    def test_default_policy_never_expires(self, sample_person):
        """Test adapters default to a never-expire policy."""
        store = MagicMock()
        cache = TypedCacheAdapter(store)

        cache.add_or_replace(PersonKey(1), sample_person)

        store.set.assert_called_once_with("person|1", sample_person, CachePolicy.never_expire(), region=None)

    def test_expired_entry_is_absent(self, memory_store, fake_clock, sample_person):
        """Test entries vanish once the store expires them."""
        cache = TypedCacheAdapter(
            memory_store,
            policy_provider=lambda key, value: CachePolicy.sliding(timedelta(seconds=10)),
        )
        cache.add(PersonKey(1), sample_person)
        fake_clock.advance(11)

        assert cache.try_get(PersonKey(1)) == (False, None)


class TestTypedCacheAdapterRegions:
    """Test cases for adapters bound to a region."""

    def test_regions_are_isolated(self, region_store, sample_person):
        """Test the same key in two regions holds separate values."""
        staff = TypedCacheAdapter(region_store, region="staff")
        guests = TypedCacheAdapter(region_store, region="guests")

        staff.add(PersonKey(1), sample_person)

        assert staff.contains(PersonKey(1))
        assert not guests.contains(PersonKey(1))
        guests.add(PersonKey(1), Person("Grace", "Hopper"))
        assert staff.get(PersonKey(1)) == sample_person

    def test_region_get_many(self, region_store, sample_person):
        """Test batch get maps regional results back to typed keys."""
        staff = TypedCacheAdapter(region_store, region="staff")
        staff.add(PersonKey(1), sample_person)

        assert staff.get_many([PersonKey(1), PersonKey(2)]) == [KeyedCacheItem(PersonKey(1), sample_person)]


class TestTypedCacheAdapterGetOrAdd:
    """Test cases for get_or_add."""

    def test_miss_invokes_factory_and_stores(self, person_cache, sample_person):
        """Test the factory result is stored and returned."""
        factory = MagicMock(return_value=sample_person)

        assert person_cache.get_or_add(PersonKey(1), factory) == sample_person
        assert person_cache.get(PersonKey(1)) == sample_person
        factory.assert_called_once_with(PersonKey(1))

    def test_hit_skips_factory(self, person_cache, sample_person):
        """Test an existing entry is returned without calling the factory."""
        person_cache.add(PersonKey(1), sample_person)
        factory = MagicMock()

        assert person_cache.get_or_add(PersonKey(1), factory) == sample_person
        factory.assert_not_called()

    def test_factory_error_stores_nothing(self, person_cache, sample_person):
        """Test a raising factory propagates and leaves the key empty."""
        def failing_factory(key):
            raise RuntimeError("backend down")

        with pytest.raises(RuntimeError, match="backend down"):
            person_cache.get_or_add(PersonKey(1), failing_factory)

        assert not person_cache.contains(PersonKey(1))
        assert person_cache.get_or_add(PersonKey(1), lambda key: sample_person) == sample_person
        assert person_cache._key_locks == {}

    def test_factory_type_is_checked_on_read_back(self, person_cache):
        """Test a factory result of the wrong type is not detected until read."""
        person_cache.get_or_add(PersonKey(1), lambda key: "text")

        with pytest.raises(CacheTypeMismatch):
            person_cache.get(PersonKey(1))

    def test_direct_add_during_factory_wins(self, person_cache, sample_person):
        """Test a value added while the factory runs is returned instead."""
        winner = Person("Grace", "Hopper")

        def racing_factory(key):
            person_cache.add(key, winner)
            return sample_person

        assert person_cache.get_or_add(PersonKey(1), racing_factory) == winner
        assert person_cache.get(PersonKey(1)) == winner

    def test_concurrent_callers_invoke_factory_once(self, person_cache, sample_person):
        """Test concurrent callers for one key share a single factory call."""
        calls = []
        calls_lock = threading.Lock()
        workers = 16
        barrier = threading.Barrier(workers)

        def slow_factory(key):
            with calls_lock:
                calls.append(key)
            time.sleep(0.05)
            return sample_person

        def worker():
            barrier.wait()
            return person_cache.get_or_add(PersonKey(1), slow_factory)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(lambda _: worker(), range(workers)))

        assert calls == [PersonKey(1)]
        assert all(result == sample_person for result in results)
        assert person_cache._key_locks == {}

    def test_different_keys_do_not_block_each_other(self, person_cache):
        """Test factories for distinct keys run at the same time."""
        first_started = threading.Event()
        second_started = threading.Event()

        def first_factory(key):
            first_started.set()
            assert second_started.wait(timeout=5)
            return Person("First", "Person")

        def second_factory(key):
            assert first_started.wait(timeout=5)
            second_started.set()
            return Person("Second", "Person")

        with ThreadPoolExecutor(max_workers=2) as executor:
            first = executor.submit(person_cache.get_or_add, PersonKey(1), first_factory)
            second = executor.submit(person_cache.get_or_add, PersonKey(2), second_factory)

            assert first.result(timeout=10) == Person("First", "Person")
            assert second.result(timeout=10) == Person("Second", "Person")

    def test_many_keys_many_threads(self, person_cache):
        """Test each key's factory runs once under mixed concurrent load."""
        counts = {}
        counts_lock = threading.Lock()

        def factory(key):
            with counts_lock:
                counts[key.person_id] = counts.get(key.person_id, 0) + 1
            time.sleep(0.01)
            return Person(str(key.person_id), "Load")

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [
                executor.submit(person_cache.get_or_add, PersonKey(i % 5), factory)
                for i in range(50)
            ]
            for future in futures:
                future.result(timeout=10)

        assert counts == {i: 1 for i in range(5)}


class TestTypedCacheAdapterGetOrDefault:
    """Test cases for get_or_default."""

    def test_missing_returns_default(self, person_cache, sample_person):
        """Test absent keys give the default."""
        assert person_cache.get_or_default(PersonKey(1)) is None
        assert person_cache.get_or_default(PersonKey(1), sample_person) == sample_person

    def test_present_returns_value(self, person_cache, sample_person):
        """Test stored values win over the default."""
        person_cache.add(PersonKey(1), sample_person)

        assert person_cache.get_or_default(PersonKey(1), Person("Grace", "Hopper")) == sample_person

    def test_cached_none_is_not_replaced_by_default(self, person_cache, sample_person):
        """Test a cached None is returned rather than the default."""
        person_cache.add(PersonKey(1), None)

        assert person_cache.get_or_default(PersonKey(1), sample_person) is None


class TestTypedCacheAdapterNumericKeys:
    """Test cases for aggregating keys with numerically equal objects."""

    def test_int_float_and_bool_keys_are_separate_entries(self, memory_store):
        """Test keys that differ only by object type address different entries."""
        cache = TypedCacheAdapter(memory_store)
        cache.add(AggregatingKey("p", "|", [1]), "int")

        assert cache.contains(AggregatingKey("p", "|", [1]))
        assert not cache.contains(AggregatingKey("p", "|", [True]))
        assert not cache.contains(AggregatingKey("p", "|", [1.0]))
        assert AggregatingKey("p", "|", [True]) != AggregatingKey("p", "|", [1])


class TestCreateTypedCacheAdapterSettings:
    """Test cases for settings-driven adapter construction."""

    def test_settings_default_policy_applied_per_write(self, sample_person):
        """Test each write asks the settings for a fresh policy."""
        store = MagicMock()
        store.add.return_value = True
        settings = MagicMock()
        first_policy = CachePolicy.sliding(timedelta(seconds=1))
        second_policy = CachePolicy.sliding(timedelta(seconds=2))
        settings.default_policy.side_effect = [first_policy, second_policy]
        cache = create_typed_cache_adapter(store, settings=settings)

        cache.add(PersonKey(1), sample_person)
        cache.add(PersonKey(2), sample_person)

        assert settings.default_policy.call_count == 2
        assert store.add.call_args_list[0].args[2] == first_policy
        assert store.add.call_args_list[1].args[2] == second_policy

    def test_explicit_policy_provider_wins(self, sample_person):
        """Test a given policy provider is used instead of the settings."""
        store = MagicMock()
        settings = MagicMock()
        policy = CachePolicy.sliding(timedelta(seconds=5))
        cache = create_typed_cache_adapter(store, policy_provider=lambda key, value: policy, settings=settings)

        cache.add_or_replace(PersonKey(1), sample_person)

        settings.default_policy.assert_not_called()
        store.set.assert_called_once_with("person|1", sample_person, policy, region=None)

    def test_settings_ttl_expires_entries(self, sample_person):
        """Test a TTL from real settings reaches the store as an absolute expiry."""
        from neo_caches.config import CacheSettings
        from neo_caches.infrastructure.stores import MemoryObjectStore

        store = MemoryObjectStore()
        cache = create_typed_cache_adapter(store, settings=CacheSettings(_env_file=None, default_ttl_seconds=60))

        cache.add(PersonKey(1), sample_person)

        entry = store._cache["person|1"]
        assert entry.policy.absolute_expiration is not None
        assert entry.expires_at is not None
