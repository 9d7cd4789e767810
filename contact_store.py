import logging
from collections import deque
from typing import Deque, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

# ────────────────────────────────────────────────────────────────────────────
# Defaults
# ────────────────────────────────────────────────────────────────────────────
TABLE_SIZE = 100
MAX_NAME_LEN = 49
MAX_PHONE_LEN = 14

HASH_SEED = 5381
HASH_MULTIPLIER = 33
HASH_MASK = (1 << 64) - 1


# ────────────────────────────────────────────────────────────────────────────
# Errors
# ────────────────────────────────────────────────────────────────────────────
class ContactStoreError(Exception):
    """Base class for phonebook store failures."""


class AllocationFailure(ContactStoreError):
    """Memory ran out while building the store or a new entry."""


class StoreClosedError(ContactStoreError):
    """The store was already torn down."""


# ────────────────────────────────────────────────────────────────────────────
# Hashing
# ────────────────────────────────────────────────────────────────────────────
def djb2(data: bytes) -> int:
    """
    Classic ``acc * 33 + byte`` string hash, seeded with 5381.
    The accumulator wraps around at 64 bits.
    """
    acc = HASH_SEED
    for c in data:
        acc = (acc * HASH_MULTIPLIER + c) & HASH_MASK
    return acc


def hash_name(name: str, bucket_count: int) -> int:
    if bucket_count <= 0:
        raise ValueError("Bucket count must be positive.")
    return djb2(name.encode("utf-8")) % bucket_count


# ────────────────────────────────────────────────────────────────────────────
# Data model
# ────────────────────────────────────────────────────────────────────────────
class Field:
    def __init__(self, value):  self.value = value

    def __str__(self):          return str(self.value)


class BoundedField(Field):
    """String value cut down to ``limit`` characters; overlong input is not an error."""

    def __init__(self, value: str, limit: int):
        super().__init__(value[:limit])


class Name(BoundedField):
    def __init__(self, value: str, limit: int = MAX_NAME_LEN):
        super().__init__(value, limit)


class Phone(BoundedField):
    def __init__(self, value: str, limit: int = MAX_PHONE_LEN):
        super().__init__(value, limit)


class Entry:
    """One name/phone record. Read-only once created."""

    __slots__ = ("_name", "_phone")

    def __init__(self, name: Name, phone: Phone):
        self._name = name
        self._phone = phone

    @property
    def name(self) -> str:
        return self._name.value

    @property
    def phone(self) -> str:
        return self._phone.value

    def __repr__(self):
        return f"Entry(name={self.name!r}, phone={self.phone!r})"


# ────────────────────────────────────────────────────────────────────────────
# Store
# ────────────────────────────────────────────────────────────────────────────
class ContactStore:
    """
    Fixed-size hash table of contacts with separate chaining.

    Every bucket holds its chain newest first, so a lookup or delete always
    hits the most recently inserted entry with a given name. Names are not
    unique: inserting an existing name adds a second entry.
    """

    def __init__(self, size: int = TABLE_SIZE,
                 max_name_len: int = MAX_NAME_LEN,
                 max_phone_len: int = MAX_PHONE_LEN):
        if size <= 0:
            raise ValueError("Bucket count must be positive.")
        if max_name_len < 0 or max_phone_len < 0:
            raise ValueError("Length limits cannot be negative.")
        self.size = size
        self.max_name_len = max_name_len
        self.max_phone_len = max_phone_len
        try:
            self._buckets: Optional[List[Deque[Entry]]] = [deque() for _ in range(size)]
        except MemoryError as exc:
            logger.error("Failed to allocate %d buckets", size)
            raise AllocationFailure("Failed to allocate the bucket array.") from exc
        self._count = 0
        logger.debug("Created contact store with %d buckets", size)

    # internals
    def _table(self) -> List[Deque[Entry]]:
        if self._buckets is None:
            raise StoreClosedError("Contact store was already torn down.")
        return self._buckets

    def _chain_for(self, name: str) -> Deque[Entry]:
        return self._table()[self.bucket_index(name)]

    def bucket_index(self, name: str) -> int:
        return hash_name(name, self.size)

    # crud
    def insert(self, name: str, phone: str) -> Entry:
        """
        Add a new entry at the head of its bucket and return it.

        Name and phone are silently truncated to the configured limits, so the
        returned entry shows what was actually stored. Raises
        ``AllocationFailure`` if the entry could not be built; the store is
        left as it was.
        """
        table = self._table()
        try:
            entry = Entry(Name(name, self.max_name_len), Phone(phone, self.max_phone_len))
        except MemoryError as exc:
            logger.error("Failed to allocate entry for %r", name)
            raise AllocationFailure("Failed to allocate contact entry.") from exc
        index = self.bucket_index(entry.name)
        table[index].appendleft(entry)
        self._count += 1
        logger.debug("Inserted %r into bucket %d", entry.name, index)
        return entry

    def search(self, name: str) -> Optional[Entry]:
        for entry in self._chain_for(name):
            if entry.name == name:
                return entry
        return None

    def delete(self, name: str) -> bool:
        """Remove the first entry named ``name`` in its chain. False if there is none."""
        chain = self._chain_for(name)
        for pos, entry in enumerate(chain):
            if entry.name == name:
                del chain[pos]
                self._count -= 1
                logger.debug("Deleted %r from bucket %d", name, self.bucket_index(name))
                return True
        return False

    # listing
    def enumerate(self) -> Iterator[Tuple[int, Entry]]:
        """Yield ``(bucket_index, entry)`` over all buckets in index order."""
        table = self._table()
        for index, chain in enumerate(table):
            for entry in chain:
                yield index, entry

    def chain(self, index: int) -> Tuple[Entry, ...]:
        return tuple(self._table()[index])

    def is_empty(self) -> bool:
        self._table()
        return self._count == 0

    def __iter__(self):
        return self.enumerate()

    def __len__(self):
        self._table()
        return self._count

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and self.search(name) is not None

    # lifecycle
    def teardown(self) -> None:
        if self._buckets is None:
            return
        for chain in self._buckets:
            chain.clear()
        self._buckets = None
        self._count = 0
        logger.debug("Contact store torn down")

    @property
    def closed(self) -> bool:
        return self._buckets is None
