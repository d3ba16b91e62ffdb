# -*- coding: utf-8 -*-
"""Byte builders and fake readers shared by the tests."""

from __future__ import annotations

import struct
import zlib
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import zstandard

from fmgcore.binder import BinderEntry

Entries = Sequence[Tuple[int, str]]

# Raw format byte used by shipped msgbnds: IDs | Names1 | Names2 | Compression, bit-reversed.
RAW_FORMAT = 0x74


def build_bnd4(entries: Entries, *, unicode: bool = True) -> bytes:
    header_size = 0x24
    names_start = 0x40 + len(entries) * header_size
    blobs: List[bytes] = []
    offsets: List[int] = []
    off = names_start
    for _, name in entries:
        blob = name.encode("utf-16-le") + b"\x00\x00" if unicode else name.encode("cp932") + b"\x00"
        offsets.append(off)
        blobs.append(blob)
        off += len(blob)

    hdr = bytearray(0x40)
    hdr[0:4] = b"BND4"
    hdr[0x0A] = 1
    struct.pack_into("<i", hdr, 0x0C, len(entries))
    struct.pack_into("<q", hdr, 0x10, 0x40)
    hdr[0x18:0x20] = b"07D7R6\x00\x00"
    struct.pack_into("<q", hdr, 0x20, header_size)
    struct.pack_into("<q", hdr, 0x28, off)
    hdr[0x30] = 1 if unicode else 0
    hdr[0x31] = RAW_FORMAT

    body = bytearray()
    for (entry_id, _), name_off in zip(entries, offsets):
        body += struct.pack("<B3xiqqIiI", 0x40, -1, 0, 0, 0, entry_id, name_off)
    return bytes(hdr) + bytes(body) + b"".join(blobs)


def build_bnd3(entries: Entries) -> bytes:
    names_start = 0x20 + len(entries) * 24
    blobs: List[bytes] = []
    offsets: List[int] = []
    off = names_start
    for _, name in entries:
        blob = name.encode("cp932") + b"\x00"
        offsets.append(off)
        blobs.append(blob)
        off += len(blob)

    hdr = bytearray(0x20)
    hdr[0:4] = b"BND3"
    hdr[0x04:0x0C] = b"07D7R6\x00\x00"
    hdr[0x0C] = RAW_FORMAT
    struct.pack_into("<i", hdr, 0x10, len(entries))
    struct.pack_into("<i", hdr, 0x14, names_start)

    body = bytearray()
    for (entry_id, _), name_off in zip(entries, offsets):
        body += struct.pack("<B3xiIiii", 0x40, 0, 0, entry_id, name_off, 0)
    return bytes(hdr) + bytes(body) + b"".join(blobs)


def _dcx_header(scheme: bytes, uncompressed: int, compressed: int) -> bytes:
    out = b"DCX\x00" + struct.pack(">iiiii", 0x10000, 0x18, 0x24, 0x24, 0x2C)
    out += b"DCS\x00" + struct.pack(">II", uncompressed, compressed)
    out += b"DCP\x00" + scheme + struct.pack(">iBxxxiiii", 0x20, 9, 0, 0, 0, 0x00010100)
    return out


def build_dcx(payload: bytes, *, scheme: bytes = b"DFLT") -> bytes:
    if scheme == b"ZSTD":
        comp = zstandard.ZstdCompressor().compress(payload)
    else:
        comp = zlib.compress(payload, 9)
    return _dcx_header(scheme, len(payload), len(comp)) + b"DCA\x00" + struct.pack(">i", 8) + comp


def build_dcx_edge(payload: bytes, *, block_size: int = 0x10000, stored: Sequence[int] = ()) -> bytes:
    """EDGE DCX with raw-deflate chunks; chunk indices in `stored` are left uncompressed."""
    chunks: List[Tuple[bytes, bool]] = []
    for i, pos in enumerate(range(0, len(payload), block_size)):
        block = payload[pos : pos + block_size]
        if i in stored:
            chunks.append((block, False))
        else:
            co = zlib.compressobj(9, zlib.DEFLATED, -15)
            chunks.append((co.compress(block) + co.flush(), True))

    table = b""
    offset = 0
    for data, compressed in chunks:
        table += struct.pack(">iiii", 0, offset, len(data), 1 if compressed else 0)
        offset += len(data)
    last = len(payload) - (len(chunks) - 1) * block_size if chunks else 0
    egdt = b"EgdT" + struct.pack(
        ">iiiiiiii", 0x00010100, 0x24, 0x10, block_size, last, 0x24 + len(table), len(chunks), 0x100000
    )
    dca = b"DCA\x00" + struct.pack(">i", 8 + len(egdt) + len(table)) + egdt + table
    return _dcx_header(b"EDGE", len(payload), offset) + dca + b"".join(d for d, _ in chunks)


def write_file(root: Path, rel: str, data: bytes) -> Path:
    path = root.joinpath(*rel.split("/"))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


# -----------------------------
# Fake ArchiveReader
# -----------------------------

FAKE_BND = b"FAKEBND\n"
FAKE_DCX = b"FAKEDCX"


def fake_binder(entries: Entries) -> bytes:
    return FAKE_BND + "\n".join(f"{i}:{n}" for i, n in entries).encode("utf-8")


def fake_dcx(payload: bytes) -> bytes:
    return FAKE_DCX + payload


class FakeReader:
    """Text-based stand-in for BinderReader that records every call."""

    def __init__(self) -> None:
        self.calls: List[str] = []

    def is_compressed(self, data: bytes) -> bool:
        self.calls.append("is_compressed")
        return data.startswith(FAKE_DCX)

    def decompress(self, data: bytes) -> bytes:
        self.calls.append("decompress")
        return data[len(FAKE_DCX):]

    def try_parse_container(self, data: bytes) -> Optional[List[BinderEntry]]:
        self.calls.append("try_parse_container")
        if not data.startswith(FAKE_BND):
            return None
        out: List[BinderEntry] = []
        for line in data[len(FAKE_BND):].decode("utf-8").splitlines():
            raw_id, name = line.split(":", 1)
            out.append(BinderEntry(name=name, id=int(raw_id)))
        return out
