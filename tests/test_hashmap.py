import itertools
import random
import string

import pytest

from sctools.hashmap import HashMap

ARR = "abcdefghijklmnoprstuvyz" * 3


def _random_str(rng, size):
    chars = string.digits + string.ascii_letters
    return "".join(rng.choice(chars) for _ in range(size - 1))


@pytest.mark.parametrize("load_factor", [1, 99, -1, 24, 96])
def test_invalid_load_factor(load_factor):
    with pytest.raises(ValueError):
        HashMap(0, load_factor)


@pytest.mark.parametrize("load_factor", [0, 25, 94, 95])
def test_valid_load_factor(load_factor):
    m = HashMap(0, load_factor)
    assert len(m) == 0
    assert m.load_factor == (75 if load_factor == 0 else load_factor)


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        HashMap(-1)


@pytest.mark.parametrize("capacity,expected", [(16, 16), (10, 16), (2, 8), (1, 8), (100, 128)])
def test_initial_capacity_is_power_of_two(capacity, expected):
    assert HashMap(capacity).capacity == expected


def test_empty_map_allocates_on_first_put():
    m = HashMap()
    assert m.capacity == 1
    m.put(5, "x")
    assert m.capacity == 8
    assert m[5] == "x"


def test_example_str():
    m = HashMap()
    m.put("jack", "chicago")
    m.put("jane", "new york")
    m.put("janie", "atlanta")
    assert dict(m.items()) == {"jack": "chicago", "jane": "new york", "janie": "atlanta"}


def test_example_int_to_str():
    m = HashMap()
    m.put(100, "chicago")
    m.put(200, "new york")
    m.put(300, "atlanta")
    assert m.get(200) == "new york"
    assert m.pop(100) == "chicago"
    assert dict(m.items()) == {200: "new york", 300: "atlanta"}
    assert m.pop(200) == "new york"
    assert 300 in m
    assert m.put(300, "los angeles") == "atlanta"
    assert m[300] == "los angeles"


def test_churn_keeps_size_bounded():
    rng = random.Random(2132132131)
    m = HashMap(2)
    ref = {}
    for i in range(20000):
        if len(m) < 16:
            m.put(i, 1)
            ref[i] = 1
        else:
            key = rng.randrange(i)
            assert m.pop(key, None) == ref.pop(key, None)
        assert len(m) == len(ref)
    assert dict(m.items()) == ref


def test_random_operations_match_dict():
    rng = random.Random(2132132131)
    count = 1000
    m = HashMap(2)
    ref = {}
    for i in range(60000):
        assert len(m) == len(ref)
        pos = i % count
        if rng.randrange(997) == 0:
            for key, value in ref.items():
                assert m[key] == value
            m = HashMap(pos, 25 + (i % 70))
            ref = {}
        op = rng.randrange(3)
        if op == 0:
            assert m.put(pos, i * 33) == ref.get(pos)
            ref[pos] = i * 33
        elif op == 1:
            assert m.pop(pos, None) == ref.pop(pos, None)
        else:
            assert m.get(pos) == ref.get(pos)
    assert dict(m.items()) == ref


def test_put_get_pop_values():
    m = HashMap(128)
    assert m.put(100, 100) is None
    assert m.get(100) == 100
    assert m.put(100, 200) == 100
    assert m.get(100) == 200
    assert m.pop(100) == 200

    assert m.put(1, 1) is None
    assert 2 not in m
    assert m.get(1) == 1
    assert m.put(2, 2) is None
    assert m.pop(1) == 1
    assert m.pop(2) == 2
    assert len(m) == 0


def test_none_key_with_string_map():
    m = HashMap(16, 94)
    assert m.pop(None, "absent") == "absent"
    assert m.pop("", "absent") == "absent"

    for i in range(14):
        m.put(ARR[i:], None)
    for i in range(15, 30):
        assert ARR[i:] not in m

    m.clear()
    m.clear()
    m.put("h", None)
    m.put("z", None)
    assert "13" not in m
    assert None not in m
    assert "h" in m
    assert "z" in m
    assert "x" not in m

    m.put(None, None)
    assert None in m
    del m[None]
    assert None not in m
    del m["h"]
    with pytest.raises(KeyError):
        del m["13"]

    m.clear()
    assert len(m) == 0


def test_string_map_random_keys():
    rng = random.Random(7)
    keys = [_random_str(rng, rng.randrange(64) + 32) for _ in range(128)]
    values = [_random_str(rng, rng.randrange(64) + 32) for _ in range(128)]

    m = HashMap()
    m.put("100", "200")
    assert m.get("100") == "200"

    m = HashMap()
    assert list(m.items()) == []
    assert list(m.keys()) == []
    assert list(m.values()) == []

    m.put("key", "value")
    m.put("key", "value2")
    assert m["key"] == "value2"
    assert m.pop("key") == "value2"
    assert "key" not in m
    m.put("key", "value3")
    assert m.pop("key") == "value3"
    with pytest.raises(KeyError):
        m.pop("key")

    m.put("key", "value")
    assert len(m) == 1
    m.put(None, "nullvalue")
    assert len(m) == 2
    assert m[None] == "nullvalue"
    assert m.pop(None) == "nullvalue"
    assert len(m) == 1

    m.clear()
    assert len(m) == 0
    for k, v in zip(keys[:100], values[:100]):
        m.put(k, v)
    for k, v in zip(keys[:100], values[:100]):
        assert m[k] == v

    m.put(keys[0], values[101])
    assert len(m) == 100
    m.put(keys[101], values[102])
    assert len(m) == 101
    m.clear()
    assert len(m) == 0

    for k, v in zip(keys[:100], values[:100]):
        m.put(k, v)
    expected = dict(zip(keys[:100], values[:100]))
    assert dict(m.items()) == expected
    assert set(m.keys()) == set(expected)
    assert sorted(m.values()) == sorted(expected.values())


@pytest.mark.parametrize("hash_mask", [0xFFFFFFFF, 0xFFFFFFFFFFFFFFFF])
def test_random_integer_keys(hash_mask):
    rng = random.Random(99)
    keys = []
    while len(keys) < 128:
        candidate = rng.getrandbits(31)
        if candidate not in keys:
            keys.append(candidate & hash_mask)
    values = [rng.getrandbits(31) for _ in range(128)]

    m = HashMap(16, 50)
    m.put(0, 0)
    m.clear()
    assert len(m) == 0

    for k, v in zip(keys[:100], values[:100]):
        m.put(k, v)
        assert m[k] == v
        m.put(k, v)
        assert m.pop(k) == v

    for k, v in zip(keys, values):
        m.put(k, v)
    assert len(m) == 128
    assert dict(m.items()) == dict(zip(keys, values))
    assert set(m) == set(keys)


def test_none_values_are_stored():
    m = HashMap(1, 87)
    for i in range(100):
        m.put(i, None)
        assert i in m
        assert m.get(i, "absent") is None
    assert len(m) == 100
    for i in range(100):
        assert m.pop(i, "absent") is None
    assert len(m) == 0
    m.put(3, None)
    assert len(m) == 1
    m.clear()
    assert len(m) == 0


def test_string_map_low_load_factor():
    rng = random.Random(3)
    keys = [_random_str(rng, rng.randrange(64) + 32) for _ in range(64)]
    m = HashMap(0, 26)
    for i, k in enumerate(keys):
        m.put(k, i)
    assert m[keys[0]] == 0
    assert len(m) == 64
    assert m.pop(keys[12]) == 12
    assert len(m) == 63


def test_none_key_iteration():
    m = HashMap()
    m.put(None, 111)
    assert list(m.items()) == [(None, 111)]
    assert list(m.keys()) == [None]
    assert list(m.values()) == [111]


def test_none_key_iterates_first():
    m = HashMap()
    m.put(5, "a")
    m.put(None, "n")
    assert next(iter(m)) is None
    assert next(m.items()) == (None, "n")


def test_many_inserts_with_deletions():
    count = 120000
    m = HashMap()

    def removed(i):
        return i % 7 == 0 or i % 17 == 0 or i % 79 == 0

    for i in range(count):
        m.put(i, i * 33)
        if removed(i):
            assert m.pop(i) == i * 33

    for i in range(count):
        if removed(i):
            assert i not in m
        else:
            assert m[i] == i * 33


def test_foreach_and_partial_iteration():
    m = HashMap(100)
    for i in range(1000):
        m.put(99 * i, 107 * 99 * i)

    seen = set()
    for key, value in m.items():
        assert key % 99 == 0
        assert key * 107 == value
        assert key not in seen
        seen.add(key)
    assert seen == {99 * i for i in range(1000)}

    partial = list(itertools.islice(m.keys(), 476))
    assert len(set(partial)) == 476

    partial_values = list(itertools.islice(m.values(), 39))
    assert len(set(partial_values)) == 39
    assert all(v % (107 * 99) == 0 for v in partial_values)


def test_generic_loop():
    m = HashMap()
    for i in range(100):
        m.put(i, i * 918)
    assert sorted(m.items()) == [(i, i * 918) for i in range(100)]
    first = list(itertools.islice(m.items(), 76))
    assert all(v == k * 918 for k, v in first)
    assert len({k for k, _ in first}) == 76


def test_colliding_hasher_deletes_correctly():
    m = HashMap(hasher=lambda key: 7)
    for i in range(50):
        m.put(i, str(i))
    for i in range(0, 50, 2):
        assert m.pop(i) == str(i)
    for i in range(50):
        if i % 2:
            assert m[i] == str(i)
        else:
            assert i not in m
    assert len(m) == 25


def test_growth_limit_raises_memory_error():
    m = HashMap(max_capacity=64)
    for i in range(48):
        m.put(i, i)
    assert m.capacity == 64
    with pytest.raises(MemoryError):
        m.put(1000, 1000)
    with pytest.raises(MemoryError):
        m.put(0, 99)
    assert len(m) == 48
    assert m[0] == 0
    assert 1000 not in m


def test_initial_capacity_over_limit():
    with pytest.raises(MemoryError):
        HashMap(100, max_capacity=64)


def test_mapping_protocol():
    m = HashMap()
    m["a"] = 1
    m[b"b"] = 2
    m[3] = 3
    assert m["a"] == 1
    assert m[b"b"] == 2
    assert sorted(map(repr, m)) == sorted(map(repr, ["a", b"b", 3]))
    with pytest.raises(KeyError):
        m["missing"]
    with pytest.raises(KeyError):
        del m["missing"]
    with pytest.raises(TypeError):
        m.pop("a", 1, 2)
    assert m.pop("missing", 7) == 7


def test_unsupported_key_type():
    m = HashMap()
    with pytest.raises(TypeError):
        m.put(1.5, "x")