"""Reading of compiled gettext message catalogs (``.mo`` files).

Both byte orders are accepted, as are catalogs of revision 0.1 and 1.1 that
carry system-dependent strings (``<inttypes.h>`` format macros).
"""

from __future__ import annotations

import os
import stat
import struct
from dataclasses import dataclass, field
from typing import Union

from motext.strhash import string_hash
from motext.sysdep import get_string_by_tag

MO_MAGIC = 0x950412DE
MO_MAGIC_SWAPPED = 0xDE120495
MO_LASTSEG = 0xFFFFFFFF
MO_HASH_SYSDEP_MASK = 0x80000000
MAX_FILE_SIZE = 1024 * 1024

_HEADER_SIZE = 28
_SYSDEP_HEADER_SIZE = 48


def _make_revision(major: int, minor: int) -> int:
    return (major << 16) | minor


# Supported revisions, mapped to whether they enable system-dependent strings.
_REVISIONS = {
    _make_revision(0, 0): False,
    _make_revision(0, 1): True,
    _make_revision(1, 1): True,
}


class MoFormatError(ValueError):
    """Raised when a message catalog is malformed or unsupported."""


def _to_key(msgid: Union[str, bytes]) -> bytes:
    key = msgid.encode("utf-8") if isinstance(msgid, str) else bytes(msgid)
    return key.split(b"\0", 1)[0]


def _collision_step(hashval: int, size: int) -> int:
    return hashval % (size - 2) + 1


def _next_index(index: int, size: int, step: int) -> int:
    return index + step - (size if index >= size - step else 0)


class _Reader:
    """Bounds-checked access to the catalog bytes."""

    def __init__(self, data: bytes, order: str) -> None:
        self.data = data
        self.order = order

    def u32(self, offset: int) -> int:
        return self.u32s(offset, 1)[0]

    def u32s(self, offset: int, count: int) -> list[int]:
        if offset < 0 or offset + 4 * count > len(self.data):
            raise MoFormatError(f"table at offset {offset} runs past end of file")
        return list(struct.unpack_from(f"{self.order}{count}I", self.data, offset))

    def span(self, offset: int, length: int) -> bytes:
        if offset < 0 or offset + length > len(self.data):
            raise MoFormatError(f"text at offset {offset} runs past end of file")
        return self.data[offset : offset + length]

    def cstring(self, offset: int) -> bytes:
        end = self.data.find(b"\0", offset) if 0 <= offset < len(self.data) else -1
        if end < 0:
            raise MoFormatError(f"unterminated string at offset {offset}")
        return self.data[offset:end]


@dataclass(eq=False)
class MoFile:
    """A parsed message catalog.

    ``originals`` and ``translations`` hold the raw bytes of each entry; plural
    forms within an entry are separated by NUL bytes.
    """

    byteorder: str
    revision: int
    originals: list[bytes]
    translations: list[bytes]
    hash_table: list[int] = field(default_factory=list)
    sysdep_originals: list[bytes] = field(default_factory=list)
    sysdep_translations: list[bytes] = field(default_factory=list)
    header: bytes | None = field(init=False, default=None)
    charset: str | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self._keys = [_to_key(text) for text in self.originals]
        self._sysdep_keys = [_to_key(text) for text in self.sysdep_originals]
        self.header = self.lookup(b"")
        self.charset = self._find_charset()

    @property
    def version(self) -> tuple[int, int]:
        """The (major, minor) file format revision."""
        return (self.revision >> 16) & 0xFFFF, self.revision & 0xFFFF

    def _find_charset(self) -> str | None:
        if self.header is None:
            return None
        header = self.header.split(b"\0", 1)[0]
        position = header.find(b"charset=")
        if position < 0:
            return None
        value = header[position + len(b"charset=") :].split(b"\n", 1)[0]
        return value.decode("latin-1")

    def lookup(self, msgid: Union[str, bytes]) -> bytes | None:
        """Return the raw translation of ``msgid``, or ``None`` if absent.

        The hash table is consulted first, then a binary search of the
        original strings.
        """
        key = _to_key(msgid)
        found = self._lookup_hash(key)
        if found is not None:
            return found
        return self._lookup_bsearch(key)

    def _lookup_hash(self, key: bytes) -> bytes | None:
        size = len(self.hash_table)
        if size <= 2:
            return None
        hashval = string_hash(key)
        step = _collision_step(hashval, size)
        index = hashval % size
        for _ in range(size):
            strno = self.hash_table[index]
            if strno == 0:
                return None
            strno -= 1
            if strno & MO_HASH_SYSDEP_MASK == 0:
                if self._keys[strno] == key:
                    return self.translations[strno]
            else:
                strno &= ~MO_HASH_SYSDEP_MASK
                if self._sysdep_keys[strno] == key:
                    return self.sysdep_translations[strno]
            index = _next_index(index, size, step)
        return None

    def _lookup_bsearch(self, key: bytes) -> bytes | None:
        count = len(self._keys)
        top, bottom, previous = 0, count, -1
        while top <= bottom:
            middle = (top + bottom) // 2
            # Unsorted data could otherwise loop forever.
            if middle == previous or middle >= count:
                break
            candidate = self._keys[middle]
            if key == candidate:
                return self.translations[middle]
            if key < candidate:
                bottom = middle
            else:
                top = middle
            previous = middle
        return None

    def __len__(self) -> int:
        return len(self.originals) + len(self.sysdep_originals)


def _read_string_table(reader: _Reader, offset: int, count: int) -> list[bytes]:
    size = len(reader.data)
    if offset > size or offset + 8 * count > size:
        raise MoFormatError(f"string table at offset {offset} runs past end of file")
    entries = reader.u32s(offset, 2 * count)
    strings = []
    for length, start in zip(entries[::2], entries[1::2]):
        if start > size or start + length + 1 > size:
            raise MoFormatError(f"string at offset {start} runs past end of file")
        strings.append(reader.data[start : start + length])
    return strings


def _insert_hash(table: list[int], key: bytes, ref: int) -> None:
    size = len(table)
    hashval = string_hash(key)
    step = _collision_step(hashval, size)
    index = hashval % size
    for _ in range(size):
        if table[index] == 0:
            table[index] = ref
            return
        index = _next_index(index, size, step)
    raise MoFormatError("hash table has no free slot for a system-dependent string")


def _read_sysdep_string(reader: _Reader, record: int, segments: list[bytes]) -> bytes:
    source = reader.u32(record)
    position = record + 4
    parts = []
    while True:
        length, ref = reader.u32s(position, 2)
        position += 8
        parts.append(reader.span(source, length))
        source += length
        if ref == MO_LASTSEG:
            break
        if ref >= len(segments):
            raise MoFormatError(f"system-dependent segment {ref} does not exist")
        parts.append(segments[ref])
    return b"".join(parts)


def _read_sysdep(
    reader: _Reader, nstring: int, hash_table: list[int]
) -> tuple[list[bytes], list[bytes]]:
    if len(reader.data) < _SYSDEP_HEADER_SIZE:
        raise MoFormatError("file too short for a system-dependent header")
    nsegs, segoff, sys_nstring, sys_otable, sys_ttable = reader.u32s(_HEADER_SIZE, 5)
    if sys_nstring == 0:
        return [], []
    if len(hash_table) <= 2 or len(hash_table) < nstring + sys_nstring:
        raise MoFormatError("hash table too small for system-dependent strings")

    segment_entries = reader.u32s(segoff, 2 * nsegs)
    segments = [
        get_string_by_tag(reader.cstring(start).decode("ascii", errors="replace")).encode(
            "ascii"
        )
        for start in segment_entries[1::2]
    ]

    def read_table(offset: int) -> list[bytes]:
        return [
            _read_sysdep_string(reader, record, segments)
            for record in reader.u32s(offset, sys_nstring)
        ]

    originals = read_table(sys_otable)
    translations = read_table(sys_ttable)
    for number, original in enumerate(originals):
        _insert_hash(hash_table, _to_key(original), (number + 1) | MO_HASH_SYSDEP_MASK)
    return originals, translations


def parse_mo(data: bytes) -> MoFile:
    """Parse the bytes of a compiled message catalog."""
    data = bytes(data)
    if len(data) < 4:
        raise MoFormatError("file too short for a magic number")
    (magic,) = struct.unpack_from("<I", data)
    if magic == MO_MAGIC:
        order, byteorder = "<", "little"
    elif magic == MO_MAGIC_SWAPPED:
        order, byteorder = ">", "big"
    else:
        raise MoFormatError(f"bad magic number 0x{magic:08x}")
    if len(data) < _HEADER_SIZE:
        raise MoFormatError("file too short for a catalog header")

    reader = _Reader(data, order)
    _, revision, nstring, otable, ttable, hsize, hoffset = reader.u32s(0, 7)
    if revision not in _REVISIONS:
        raise MoFormatError(f"unsupported revision 0x{revision:08x}")

    originals = _read_string_table(reader, otable, nstring)
    translations = _read_string_table(reader, ttable, nstring)

    hash_table: list[int] = []
    if hsize > 2:
        hash_table = reader.u32s(hoffset, hsize)
        if any(entry >= nstring + 1 for entry in hash_table):
            raise MoFormatError("hash table refers to a string that does not exist")

    sysdep_originals: list[bytes] = []
    sysdep_translations: list[bytes] = []
    if _REVISIONS[revision]:
        sysdep_originals, sysdep_translations = _read_sysdep(reader, nstring, hash_table)

    return MoFile(
        byteorder=byteorder,
        revision=revision,
        originals=originals,
        translations=translations,
        hash_table=hash_table,
        sysdep_originals=sysdep_originals,
        sysdep_translations=sysdep_translations,
    )


def load_mo(path: Union[str, os.PathLike]) -> MoFile:
    """Read and parse the catalog at ``path``.

    Only regular files of at most ``MAX_FILE_SIZE`` bytes are accepted.
    """
    info = os.stat(path)
    if not stat.S_ISREG(info.st_mode):
        raise MoFormatError(f"{os.fspath(path)} is not a regular file")
    if info.st_size > MAX_FILE_SIZE:
        raise MoFormatError(f"{os.fspath(path)} is larger than {MAX_FILE_SIZE} bytes")
    with open(path, "rb") as handle:
        return parse_mo(handle.read())