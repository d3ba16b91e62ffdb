# -*- coding: utf-8 -*-
"""binder.py

Minimal readers for the container formats FMGs ship in:
- DCX compression wrapper (DFLT, EDGE and ZSTD payloads; KRAK is refused)
- BND3 and BND4 binders (file table only: entry names and ids)

Only what the catalog needs is decoded. Entry payloads are never read.

Format notes
- DCX headers are always big-endian.
- Binder format flags are stored bit-reversed unless the "bit big endian"
  flag is set or the raw byte already looks normalized.
- BND3 names are Shift-JIS; BND4 names are UTF-16 when the unicode flag is set.
"""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol

import zstandard

from fmgcore.errors import BinderFormatError, UnrecognizedContainerError, UnsupportedCompressionError

MAGIC_DCX = b"DCX\x00"
MAGIC_DCS = b"DCS\x00"
MAGIC_DCP = b"DCP\x00"
MAGIC_DCA = b"DCA\x00"
MAGIC_EGDT = b"EgdT"
MAGIC_BND3 = b"BND3"
MAGIC_BND4 = b"BND4"

# Normalized binder format flags
FMT_BIG_ENDIAN = 0x01
FMT_IDS = 0x02
FMT_NAMES1 = 0x04
FMT_NAMES2 = 0x08
FMT_LONG_OFFSETS = 0x10
FMT_COMPRESSION = 0x20

_SHIFT_JIS = "cp932"


@dataclass(frozen=True)
class BinderEntry:
    name: str
    id: int


class ArchiveReader(Protocol):
    def is_compressed(self, data: bytes) -> bool:
        ...

    def decompress(self, data: bytes) -> bytes:
        ...

    def try_parse_container(self, data: bytes) -> Optional[List[BinderEntry]]:
        ...


# -----------------------------
# DCX
# -----------------------------


def is_dcx(data: bytes) -> bool:
    return len(data) >= 4 and data[:4] == MAGIC_DCX


def _inflate(data: bytes, dca: int, start: int, compressed_size: int) -> bytes:
    return zlib.decompress(data[start : start + compressed_size])


def _unzstd(data: bytes, dca: int, start: int, compressed_size: int) -> bytes:
    (uncompressed_size,) = struct.unpack_from(">I", data, 0x1C)
    payload = data[start : start + compressed_size]
    return zstandard.ZstdDecompressor().decompress(payload, max_output_size=uncompressed_size)


def _inflate_edge(data: bytes, dca: int, start: int, compressed_size: int) -> bytes:
    """EDGE: EgdT chunk table inside the DCA block, raw-deflate chunks after it."""
    egdt = dca + 8
    if data[egdt : egdt + 4] != MAGIC_EGDT:
        raise BinderFormatError("DCX EDGE chunk table missing")
    (chunk_count,) = struct.unpack_from(">i", data, egdt + 0x1C)
    out = bytearray()
    for i in range(chunk_count):
        _, offset, size, compressed = struct.unpack_from(">iiii", data, egdt + 0x24 + i * 0x10)
        chunk = data[start + offset : start + offset + size]
        out += zlib.decompress(chunk, -15) if compressed else chunk
    return bytes(out)


_DCX_DECODERS: Dict[bytes, Callable[[bytes, int, int, int], bytes]] = {
    b"DFLT": _inflate,
    b"ZSTD": _unzstd,
    b"EDGE": _inflate_edge,
}


def decompress_dcx(data: bytes) -> bytes:
    if not is_dcx(data):
        raise BinderFormatError("Not a DCX file")
    try:
        if data[0x18:0x1C] != MAGIC_DCS or data[0x24:0x28] != MAGIC_DCP:
            raise BinderFormatError("DCX header blocks out of place")
        uncompressed_size, compressed_size = struct.unpack_from(">II", data, 0x1C)
        scheme = bytes(data[0x28:0x2C])
    except struct.error as e:
        raise BinderFormatError(f"DCX header truncated: {e}") from e

    decode = _DCX_DECODERS.get(scheme)
    if decode is None:
        # KRAK (Oodle) has no redistributable decoder
        raise UnsupportedCompressionError(f"DCX compression {scheme.decode('ascii', 'replace')!r} is not supported")

    dca = data.find(MAGIC_DCA, 0x2C)
    if dca < 0:
        raise BinderFormatError("DCX data block missing")
    try:
        (dca_size,) = struct.unpack_from(">I", data, dca + 4)
        out = decode(data, dca, dca + dca_size, compressed_size)
    except (struct.error, zlib.error, zstandard.ZstdError) as e:
        raise BinderFormatError(f"DCX payload corrupt ({scheme.decode('ascii')}): {e}") from e
    if len(out) != uncompressed_size:
        raise BinderFormatError(f"DCX size mismatch: expected {uncompressed_size}, got {len(out)}")
    return out


# -----------------------------
# BND3 / BND4
# -----------------------------


def _reverse_bits(b: int) -> int:
    out = 0
    for i in range(8):
        if b & (1 << i):
            out |= 1 << (7 - i)
    return out


def read_format(raw: int, bit_big_endian: bool) -> int:
    keep = bit_big_endian or ((raw & 0x01) != 0 and (raw & 0x80) == 0)
    return raw if keep else _reverse_bits(raw)


def _has_names(fmt: int) -> bool:
    return bool(fmt & (FMT_NAMES1 | FMT_NAMES2))


def _read_cstring(data: bytes, offset: int, *, utf16: bool = False, big_endian: bool = False) -> str:
    if offset < 0 or offset >= len(data):
        raise BinderFormatError(f"Name offset out of range: {offset}")
    if utf16:
        end = offset
        while end + 1 < len(data) and data[end : end + 2] != b"\x00\x00":
            end += 2
        return data[offset:end].decode("utf-16-be" if big_endian else "utf-16-le")
    end = data.find(b"\x00", offset)
    if end < 0:
        end = len(data)
    return data[offset:end].decode(_SHIFT_JIS)


def parse_bnd3(data: bytes) -> List[BinderEntry]:
    if data[:4] != MAGIC_BND3:
        raise UnrecognizedContainerError("Not a BND3 binder")
    try:
        raw_fmt, big_endian, bit_big_endian = struct.unpack_from("<BBB", data, 0x0C)
        fmt = read_format(raw_fmt, bool(bit_big_endian))
        e = ">" if (big_endian or fmt & FMT_BIG_ENDIAN) else "<"
        (file_count,) = struct.unpack_from(e + "i", data, 0x10)

        entries: List[BinderEntry] = []
        off = 0x20
        for _ in range(file_count):
            off += 8  # flags, padding, compressed size
            off += 8 if fmt & FMT_LONG_OFFSETS else 4
            entry_id = -1
            if fmt & FMT_IDS:
                (entry_id,) = struct.unpack_from(e + "i", data, off)
                off += 4
            name = ""
            if _has_names(fmt):
                (name_off,) = struct.unpack_from(e + "i", data, off)
                off += 4
                name = _read_cstring(data, name_off)
            if fmt & FMT_COMPRESSION:
                off += 4
            entries.append(BinderEntry(name=name, id=int(entry_id)))
    except (struct.error, UnicodeDecodeError) as ex:
        raise BinderFormatError(f"BND3 file table unreadable: {ex}") from ex
    return entries


def parse_bnd4(data: bytes) -> List[BinderEntry]:
    if data[:4] != MAGIC_BND4:
        raise UnrecognizedContainerError("Not a BND4 binder")
    try:
        big_endian = bool(data[0x09])
        bit_big_endian = not bool(data[0x0A])
        e = ">" if big_endian else "<"
        (file_count,) = struct.unpack_from(e + "i", data, 0x0C)
        (header_size,) = struct.unpack_from(e + "q", data, 0x20)
        unicode, raw_fmt = struct.unpack_from("<BB", data, 0x30)
        fmt = read_format(raw_fmt, bit_big_endian)

        entries: List[BinderEntry] = []
        for i in range(file_count):
            off = 0x40 + i * header_size + 16  # flags, padding, -1, compressed size
            if fmt & FMT_COMPRESSION:
                off += 8
            off += 8 if fmt & FMT_LONG_OFFSETS else 4
            entry_id = -1
            if fmt & FMT_IDS:
                (entry_id,) = struct.unpack_from(e + "i", data, off)
                off += 4
            name = ""
            if _has_names(fmt):
                (name_off,) = struct.unpack_from(e + "I", data, off)
                off += 4
                name = _read_cstring(data, name_off, utf16=bool(unicode), big_endian=big_endian)
            if fmt == FMT_NAMES1:
                (entry_id,) = struct.unpack_from(e + "i", data, off)
            entries.append(BinderEntry(name=name, id=int(entry_id)))
    except (struct.error, IndexError, UnicodeDecodeError) as ex:
        raise BinderFormatError(f"BND4 file table unreadable: {ex}") from ex
    return entries


def parse_binder(data: bytes) -> List[BinderEntry]:
    magic = bytes(data[:4])
    if magic == MAGIC_BND3:
        return parse_bnd3(data)
    if magic == MAGIC_BND4:
        return parse_bnd4(data)
    raise UnrecognizedContainerError(f"Unknown container magic {magic!r}")


class BinderReader:
    """Default ArchiveReader backed by the parsers above."""

    def is_compressed(self, data: bytes) -> bool:
        return is_dcx(data)

    def decompress(self, data: bytes) -> bytes:
        return decompress_dcx(data)

    def try_parse_container(self, data: bytes) -> Optional[List[BinderEntry]]:
        try:
            return parse_binder(data)
        except UnrecognizedContainerError:
            return None
