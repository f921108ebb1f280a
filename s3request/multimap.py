"""Case-insensitive multi-valued container for request headers and query.

A Multimap keeps every key in the casing it was added with (needed to put
headers on the wire as given) and indexes it under its lower-cased form for
lookups. Values are deduplicated per key.

It also renders the two canonical forms AWS Signature Version 4 hashes:

- canonical headers and the signed-headers list
- the canonical query string

Both must be byte-exact, so ordering is always explicit (sorted), never
dependent on set iteration order.

Example:
    >>> headers = Multimap()
    >>> headers.add("Host", "play.min.io")
    >>> headers.add("X-Amz-Meta-Note", "a   b")
    >>> headers.get_canonical_headers()
    ('host;x-amz-meta-note', 'host:play.min.io\\nx-amz-meta-note:a b')
"""

import re
from typing import Iterable, Iterator, Mapping, Optional, Union

import httpx

from s3request.encoding import quote

# Headers that never take part in a signature
UNSIGNED_HEADERS = frozenset({"authorization", "user-agent"})

MULTI_SPACE_REGEX = re.compile(" +")

PairsOrMapping = Union[Mapping[str, str], Iterable[tuple[str, str]]]


class Multimap:
    """Ordered, case-insensitive, multi-valued mapping of strings.

    Not safe for concurrent mutation. Build one per request; once it is no
    longer mutated it can be read from several threads.
    """

    def __init__(self, initial: Optional[PairsOrMapping] = None):
        """Initialize the multimap.

        Args:
            initial: Optional mapping or iterable of (key, value) pairs
                     added in order.
        """
        self._entries: dict[str, set[str]] = {}
        self._keys: dict[str, set[str]] = {}

        if initial is not None:
            pairs = initial.items() if isinstance(initial, Mapping) else initial
            for key, value in pairs:
                self.add(key, value)

    def add(self, key: str, value: str) -> None:
        """Add a value under key, keeping the key's casing."""
        self._entries.setdefault(key, set()).add(value)
        self._keys.setdefault(key.lower(), set()).add(key)

    def add_all(self, other: "Multimap") -> None:
        """Merge every entry of other into this multimap."""
        for key, values in other._entries.items():
            self._entries.setdefault(key, set()).update(values)
            self._keys.setdefault(key.lower(), set()).add(key)

    def contains(self, key: str) -> bool:
        """Check whether any spelling of key has been added."""
        return key.lower() in self._keys

    def get(self, key: str) -> list[str]:
        """Get all values of key across every spelling of it.

        Returns:
            Distinct values, sorted. Empty if key is absent.
        """
        values: set[str] = set()
        for spelling in self._keys.get(key.lower(), ()):
            values.update(self._entries[spelling])
        return sorted(values)

    def get_front(self, key: str) -> str:
        """Get one value of key, or an empty string if there is none."""
        values = self.get(key)
        return values[0] if values else ""

    def keys(self) -> list[str]:
        """Get the distinct lower-cased keys, sorted."""
        return sorted(self._keys)

    def items(self) -> Iterator[tuple[str, str]]:
        """Iterate over (original key, value) pairs.

        Keys come in the order they were first added, values of a key sorted.
        """
        for key in self._entries:
            for value in sorted(self._entries[key]):
                yield key, value

    def to_http_headers(self) -> list[str]:
        """Render one "Key: value" line per stored value."""
        return [f"{key}: {value}" for key, value in self.items()]

    def to_httpx_headers(self) -> httpx.Headers:
        """Build httpx headers, one entry per stored value."""
        return httpx.Headers(list(self.items()))

    def to_query_string(self) -> str:
        """Render the entries as an encoded query string."""
        return "&".join(f"{quote(key)}={quote(value)}" for key, value in self.items())

    def get_canonical_headers(self) -> tuple[str, str]:
        """Compute the SigV4 signed headers and canonical headers.

        Authorization and User-Agent are left out. Keys are lower-cased,
        values of one key (over all its spellings) are joined with ',' and
        runs of spaces inside a value are folded to a single space.

        Returns:
            (signed_headers, canonical_headers): the sorted lower-cased keys
            joined by ';', and the matching "key:value" lines joined by '\\n'.
        """
        canonical: dict[str, str] = {}
        for key in self._keys:
            if key in UNSIGNED_HEADERS:
                continue
            canonical[key] = ",".join(
                MULTI_SPACE_REGEX.sub(" ", value) for value in self.get(key)
            )

        signed = sorted(canonical)
        signed_headers = ";".join(signed)
        canonical_headers = "\n".join(f"{key}:{canonical[key]}" for key in signed)
        return signed_headers, canonical_headers

    def get_canonical_query_string(self) -> str:
        """Compute the SigV4 canonical query string.

        Every pair is percent-encoded first, then pairs are sorted by their
        encoded key, then encoded value.
        """
        pairs = sorted(
            (quote(key), quote(value))
            for key, values in self._entries.items()
            for value in values
        )
        return "&".join(f"{key}={value}" for key, value in pairs)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return sum(len(values) for values in self._entries.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Multimap):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Multimap({list(self.items())!r})"
