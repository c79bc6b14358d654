# common/codec.py
"""Binary encoding for shapes, fingerprints and level maps.

All integers are little-endian. A level map record is::

    magic "PCLM" | version u16 | block_count u32 | bucket_count u32
    bucket*:  fingerprint | shape_count u32 | shape*

    fingerprint: block_count u32 | density dec | alignment dec x3
    dec:         length u16 | ascii text of the decimal
    shape:       extent 6*u32 | rotations 3*u8 | mirrors 3*u8
                 | block_count u32 | bit_bytes u32 | bits
"""
import struct
from decimal import Decimal, InvalidOperation
from typing import BinaryIO, List, Tuple

from engine.level_map import LevelMap
from geometry.orientation import Orientation, RotationAmount
from geometry.point import BoundedExtent
from lattice.arrangement import ShapeArrangement
from lattice.bitset import OccupancyBits
from lattice.fingerprint import ShapeFingerprint
from lattice.mapper import Mapper

MAGIC = b"PCLM"
VERSION = 1

_HEADER = struct.Struct("<4sHII")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_EXTENT = struct.Struct("<6I")
_ORIENTATION = struct.Struct("<6B")


class CodecError(ValueError):
    """Raised when a byte stream does not hold a valid record."""


class _Reader:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def unpack(self, fmt: struct.Struct) -> Tuple:
        try:
            values = fmt.unpack_from(self.data, self.offset)
        except struct.error as exc:
            raise CodecError(f"truncated record at byte {self.offset}") from exc
        self.offset += fmt.size
        return values

    def take(self, length: int) -> bytes:
        end = self.offset + length
        if end > len(self.data):
            raise CodecError(f"truncated record at byte {self.offset}")
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def expect_end(self) -> None:
        if self.offset != len(self.data):
            raise CodecError(f"{len(self.data) - self.offset} trailing bytes after record")


# ---------- Decimals ----------

def _encode_decimal(value: Decimal) -> bytes:
    text = str(value).encode("ascii")
    return _U16.pack(len(text)) + text


def _decode_decimal(reader: _Reader) -> Decimal:
    (length,) = reader.unpack(_U16)
    raw = reader.take(length)
    try:
        value = Decimal(raw.decode("ascii"))
    except (UnicodeDecodeError, InvalidOperation) as exc:
        raise CodecError(f"invalid decimal {raw!r}") from exc
    if not value.is_finite():
        raise CodecError(f"non-finite decimal {raw!r}")
    return value


# ---------- Fingerprints ----------

def _write_fingerprint(out: List[bytes], fingerprint: ShapeFingerprint) -> None:
    out.append(_U32.pack(fingerprint.block_count))
    out.append(_encode_decimal(fingerprint.density))
    for alignment in fingerprint.axis_alignments:
        out.append(_encode_decimal(alignment))


def _read_fingerprint(reader: _Reader) -> ShapeFingerprint:
    (block_count,) = reader.unpack(_U32)
    density = _decode_decimal(reader)
    alignments = tuple(_decode_decimal(reader) for _ in range(3))
    return ShapeFingerprint(block_count, density, alignments)


def encode_fingerprint(fingerprint: ShapeFingerprint) -> bytes:
    out: List[bytes] = []
    _write_fingerprint(out, fingerprint)
    return b"".join(out)


def decode_fingerprint(data: bytes) -> ShapeFingerprint:
    reader = _Reader(data)
    fingerprint = _read_fingerprint(reader)
    reader.expect_end()
    return fingerprint


# ---------- Shapes ----------

def _write_shape(out: List[bytes], shape: ShapeArrangement) -> None:
    extent = shape.extent
    orientation = shape.orientation
    out.append(_EXTENT.pack(
        extent.x_pos, extent.x_neg,
        extent.y_pos, extent.y_neg,
        extent.z_pos, extent.z_neg,
    ))
    out.append(_ORIENTATION.pack(
        orientation.x_rot.value, orientation.y_rot.value, orientation.z_rot.value,
        int(orientation.x_mir), int(orientation.y_mir), int(orientation.z_mir),
    ))
    bits = shape.bits.to_bytes()
    out.append(_U32.pack(shape.block_count))
    out.append(_U32.pack(len(bits)))
    out.append(bits)


def _read_shape(reader: _Reader) -> ShapeArrangement:
    extent = BoundedExtent(*reader.unpack(_EXTENT))
    x_rot, y_rot, z_rot, x_mir, y_mir, z_mir = reader.unpack(_ORIENTATION)
    try:
        orientation = Orientation(
            RotationAmount(x_rot), RotationAmount(y_rot), RotationAmount(z_rot),
            bool(x_mir), bool(y_mir), bool(z_mir),
        )
    except ValueError as exc:
        raise CodecError(f"invalid rotation in {(x_rot, y_rot, z_rot)}") from exc
    if max(x_mir, y_mir, z_mir) > 1:
        raise CodecError(f"invalid mirror flags {(x_mir, y_mir, z_mir)}")

    (block_count,) = reader.unpack(_U32)
    (bit_length,) = reader.unpack(_U32)
    mapper = Mapper(extent, orientation)
    try:
        bits = OccupancyBits.from_bytes(mapper.size, reader.take(bit_length))
        shape = ShapeArrangement.from_storage(mapper, bits)
    except ValueError as exc:
        raise CodecError(str(exc)) from exc
    if shape.block_count != block_count:
        raise CodecError(
            f"block count {block_count} does not match {shape.block_count} stored blocks"
        )
    return shape


def encode_shape(shape: ShapeArrangement) -> bytes:
    out: List[bytes] = []
    _write_shape(out, shape)
    return b"".join(out)


def decode_shape(data: bytes) -> ShapeArrangement:
    reader = _Reader(data)
    shape = _read_shape(reader)
    reader.expect_end()
    return shape


# ---------- Level maps ----------

def encode_level_map(level: LevelMap) -> bytes:
    buckets = list(level.buckets())
    out: List[bytes] = [_HEADER.pack(MAGIC, VERSION, level.block_count, len(buckets))]
    for fingerprint, shapes in buckets:
        _write_fingerprint(out, fingerprint)
        out.append(_U32.pack(len(shapes)))
        for shape in shapes:
            _write_shape(out, shape)
    return b"".join(out)


def decode_level_map(data: bytes) -> LevelMap:
    reader = _Reader(data)
    magic, version, block_count, bucket_count = reader.unpack(_HEADER)
    if magic != MAGIC:
        raise CodecError(f"bad magic {magic!r}")
    if version != VERSION:
        raise CodecError(f"unsupported version {version}")
    try:
        level = LevelMap(block_count)
        for _ in range(bucket_count):
            fingerprint = _read_fingerprint(reader)
            (shape_count,) = reader.unpack(_U32)
            shapes = [_read_shape(reader) for _ in range(shape_count)]
            if any(shape.block_count != block_count for shape in shapes):
                raise CodecError("shape block count does not match level")
            level.add_bucket(fingerprint, shapes)
    except CodecError:
        raise
    except ValueError as exc:
        raise CodecError(str(exc)) from exc
    reader.expect_end()
    return level


def write_level_map(handle: BinaryIO, level: LevelMap) -> None:
    handle.write(encode_level_map(level))


def read_level_map(handle: BinaryIO) -> LevelMap:
    return decode_level_map(handle.read())
