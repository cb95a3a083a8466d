# sctools

A handful of small, dependency-free building blocks:

- `sctools.hashmap.HashMap` – an open-addressing hash map with linear probing,
  backward-shift deletion, a configurable load factor and a capacity limit.
- `sctools.hashing` – the hash functions the map uses by default
  (`murmurhash`, `hash_32`, `hash_64`).
- `sctools.ringqueue.RingQueue` – a double-ended queue on a power-of-two ring
  buffer.
- `sctools.options.OptionParser` – a tiny matcher for `-k`, `-k=value`,
  `--key` and `--key=value` style arguments.
- `sctools.memmap.MemoryMap` – a memory-mapped file that extends the file
  when it is mapped for writing.
- `sctools.mutex.Mutex` – a non-recursive lock usable as a context manager.

## Installation

```
pip install sctools
```

## Hash map

```python
from sctools.hashmap import HashMap

cities = HashMap()
cities.put("jack", "chicago")
cities["jane"] = "new york"
cities["janie"] = "atlanta"

for name, city in cities.items():
    print(name, city)

cities.get("jane")           # "new york"
cities.get("bob", "nowhere") # "nowhere"
cities.pop("jack")           # "chicago"
cities.pop("jack", None)     # None
len(cities)                  # 2
```

- `HashMap(capacity=0, load_factor=0, hasher=None, max_capacity=...)`.
  A `capacity` of 0 starts with a one-slot table that grows on the first
  insertion. The load factor is a percentage from 25 to 95; `0` selects the
  default of 75, anything else out of range raises `ValueError`.
- `put` returns the value it replaced, or `None` if the key was new.
- `pop(key)` raises `KeyError` for a missing key unless a default is given;
  `del map[key]` and `map[key]` raise `KeyError` as well.
- `None` is a valid key. Iteration (`keys()`, `values()`, `items()`,
  `iter(map)`) yields the `None` key first, if present, then the table in
  slot order.
- By default strings and bytes are hashed with `murmurhash` and integers
  with `hash_64`; pass `hasher` to supply your own 32-bit hash.
- Growing past `max_capacity` slots raises `MemoryError`.
- `clear()` empties the map but keeps its table; the `capacity` and
  `load_factor` properties report the current table size and load factor.

## Hash functions

```python
from sctools.hashing import hash_32, hash_64, murmurhash

murmurhash("jack")   # 32-bit hash of the UTF-8 bytes
hash_32(100)         # 100
hash_64(1 << 32)     # 1  (high and low halves XORed)
```

`murmurhash` accepts `str` or bytes-like keys and stops at the first NUL
byte; any other type raises `TypeError`.

## Ring queue

```python
from sctools.ringqueue import RingQueue

queue = RingQueue()
queue.add_last(2)
queue.add_last(3)
queue.add_first(1)

list(queue)          # [1, 2, 3]
queue[0]             # 1
queue.peek_last()    # 3
queue.del_last()     # 3
queue.del_first()    # 1
```

The buffer starts at eight slots and doubles when full; one slot is always
left free. Removing or peeking on an empty queue, or indexing out of range,
raises `IndexError`. With `RingQueue(max_capacity=n)`, an insertion that
would need a buffer larger than `n` raises `MemoryError` and leaves the
queue unchanged. `clear()` empties the queue and keeps its buffer.

## Options

```python
from sctools.options import OptionItem, OptionParser

parser = OptionParser([OptionItem("m"), OptionItem("k", "key"), OptionItem("h", "help")])
parser.at("--key=value")   # ("k", "value")
parser.at("-k=value")      # ("k", "value")
parser.at("-m")            # ("m", "")
parser.at("-mx")           # ("?", None)
parser.at("-x")            # ("?", None)

list(parser.parse(["-m", "--help"]))   # [("m", ""), ("h", "")]
```

A short option matches only when its letter is followed by `=`, a space or
the end of the argument. Arguments that do not start with `-`, and unknown
options, give `("?", None)` (`sctools.options.UNKNOWN` is `"?"`).
`OptionItem` requires a one-character letter and raises `ValueError`
otherwise. The parser matches one argument at a time; it does not combine
flags, read the next argument as a value, or print help.

## Memory map

```python
import os

from sctools.memmap import MAP_SHARED, PROT_READ, PROT_WRITE, MemoryMap

with MemoryMap("data.bin", os.O_RDWR | os.O_CREAT | os.O_TRUNC,
               PROT_READ | PROT_WRITE, MAP_SHARED, 0, 8192) as m:
    m[0] = ord("x")
    m.sync(0, 4096)
    len(m)   # 8192
```

- A writable mapping first extends the file to cover `offset + length`
  bytes.
- A `length` of 0 maps from `offset` to the end of the file; if that leaves
  nothing to map, `MemoryMapError` is raised.
- `sync(offset, length)` rounds `offset` down to a page boundary and clips
  the range to the mapping.
- `close()` releases the mapping and may be called more than once; the
  `closed` property tells whether it has been. Indexing a closed map raises
  `ValueError`.
- Failures to open, extend, map or sync raise `MemoryMapError`, a subclass
  of `OSError`.

Locking pages in memory is not offered.

## Mutex

```python
from sctools.mutex import Mutex

mutex = Mutex()
mutex.lock()
mutex.unlock()

with mutex:
    ...

mutex.close()
```

The mutex is not recursive. Unlocking it when it is not held, using it
after `close()`, or closing it while it is held raises `RuntimeError`. The
`locked` and `closed` properties report its state.

## What is not included

This is a library only: it installs no commands.

## Running the tests

```
pip install -e .[test]
pytest
```