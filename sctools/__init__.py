"""Small building blocks: hash map and its hash functions, ring queue, option matcher, memory-mapped files and a mutex."""

__version__ = "2.0.0"
__all__ = ["hashing", "hashmap", "ringqueue", "options", "memmap", "mutex"]