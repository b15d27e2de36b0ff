"""Access to game files, either loose on disk or inside an encrypted data pack."""

from __future__ import annotations

import os
import struct
from enum import Enum, auto
from typing import BinaryIO, Mapping, Optional, Union

PathLike = Union[str, "os.PathLike[str]"]

_KEY_A = b"4RaS9D7KaEbxcp2o5r6t"
_KEY_B = b"3tRaUxLmEaSn"

_GLOBAL_CODE_MOBILE = "Data/Scripts/ByteCode/GlobalCode.bin"
_GLOBAL_CODE_PC = "Data/Scripts/ByteCode/GS000.bin"


class BytecodeMode(Enum):
    """Which flavour of compiled scripts the game data carries."""

    MOBILE = auto()
    PC = auto()


class FileNotInPackError(FileNotFoundError):
    """The requested file is not stored in the data pack."""


class DataCipher:
    """Keystream used to decrypt files stored inside a data pack."""

    def __init__(self, file_size: int) -> None:
        self.string_no = (file_size & 0x1FC) >> 2
        self.pos_b = self.string_no % 9 + 1
        self.pos_a = self.string_no % self.pos_b + 1
        self.nybble_swap = False

    def _step(self) -> None:
        if self.pos_a <= 19 or self.pos_b <= 11:
            if self.pos_a > 19:
                self.pos_a = 1
                self.nybble_swap = not self.nybble_swap
            if self.pos_b > 11:
                self.pos_b = 1
                self.nybble_swap = not self.nybble_swap
            return
        self.string_no = (self.string_no + 1) & 0x7F
        if self.nybble_swap:
            self.nybble_swap = False
            self.pos_a = self.string_no % 12 + 6
            self.pos_b = self.string_no % 5 + 4
        else:
            self.nybble_swap = True
            self.pos_a = self.string_no % 15 + 3
            self.pos_b = self.string_no % 7 + 1

    def _decrypt_byte(self, value: int) -> int:
        value ^= _KEY_B[self.pos_b] ^ self.string_no
        self.pos_b += 1
        if self.nybble_swap:
            value = ((value & 0xF) << 4) | (value >> 4)
        value ^= _KEY_A[self.pos_a]
        self.pos_a += 1
        self._step()
        return value & 0xFF

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt the next bytes of the stream."""
        return bytes(self._decrypt_byte(value) for value in data)

    def skip(self, count: int) -> None:
        """Advance the keystream by ``count`` bytes without decrypting."""
        for _ in range(count):
            self.pos_a += 1
            self.pos_b += 1
            self._step()


def _same_name(a: str, b: str) -> bool:
    return a.lower() == b.lower()


def _split_path(file_path: str) -> tuple[str, str]:
    directory, slash, name = file_path.rpartition("/")
    return directory + slash, name


class PackedFile:
    """A readable file: loose on disk, or a region of a data pack."""

    def __init__(
        self,
        path: PathLike,
        offset: int = 0,
        size: Optional[int] = None,
        encrypted: bool = False,
    ) -> None:
        self.name = os.fspath(path)
        self._handle: BinaryIO = open(path, "rb")
        self._offset = offset
        if size is None:
            self._handle.seek(0, os.SEEK_END)
            size = self._handle.tell() - offset
        self.size = size
        self.encrypted = encrypted
        self._cipher: Optional[DataCipher] = DataCipher(size) if encrypted else None
        self._handle.seek(offset)

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes; a negative size reads to the end."""
        if size is None or size < 0:
            size = max(self.size - self.tell(), 0)
        data = self._handle.read(size)
        if self._cipher is not None:
            data = self._cipher.decrypt(data)
        return data

    def tell(self) -> int:
        """Position relative to the start of the file."""
        return self._handle.tell() - self._offset

    def seek(self, position: int) -> None:
        """Move to an absolute position within the file."""
        self._handle.seek(self._offset + position)
        if self.encrypted:
            self._cipher = DataCipher(self.size)
            self._cipher.skip(position)

    def at_end(self) -> bool:
        """True once the position has reached the file's size."""
        return self.tell() >= self.size

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> "PackedFile":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _read_exact(handle: BinaryIO, count: int) -> bytes:
    data = handle.read(count)
    if len(data) != count:
        raise EOFError("unexpected end of data pack")
    return data


class DataPack:
    """A data pack: a directory table followed by encrypted file entries."""

    def __init__(self, path: PathLike) -> None:
        self.path = os.fspath(path)
        with open(self.path, "rb") as handle:
            handle.seek(0, os.SEEK_END)
            self.file_size = handle.tell()
            handle.seek(0)
            try:
                self.header_size, dir_count = struct.unpack("<IH", _read_exact(handle, 6))
                self.directories: list[tuple[str, int]] = []
                for _ in range(dir_count):
                    length = _read_exact(handle, 1)[0]
                    mask = 0xFF - length
                    raw = _read_exact(handle, length)
                    name = bytes(b ^ mask for b in raw).decode("latin-1")
                    (offset,) = struct.unpack("<I", _read_exact(handle, 4))
                    self.directories.append((name, offset))
            except EOFError as exc:
                raise ValueError(f"truncated data pack header in {self.path!r}") from exc

    def locate(self, file_path: str) -> tuple[int, int]:
        """Return the absolute data offset and size of a stored file."""
        directory, name = _split_path(file_path)
        index = next(
            (i for i, (dir_name, _) in enumerate(self.directories) if _same_name(directory, dir_name)),
            None,
        )
        if index is None:
            raise FileNotInPackError(file_path)

        dir_offset = self.directories[index][1]
        if index + 1 < len(self.directories):
            next_offset = self.directories[index + 1][1]
        else:
            next_offset = self.file_size - self.header_size
        limit = next_offset + self.header_size

        position = dir_offset + self.header_size
        with open(self.path, "rb") as handle:
            try:
                while True:
                    handle.seek(position)
                    length = _read_exact(handle, 1)[0]
                    entry = bytes(~b & 0xFF for b in _read_exact(handle, length))
                    (size,) = struct.unpack("<I", _read_exact(handle, 4))
                    position += 1 + length + 4
                    found = _same_name(name, entry.decode("latin-1"))
                    if not found:
                        position += size
                    if position >= limit:
                        raise FileNotInPackError(file_path)
                    if found:
                        return position, size
            except EOFError as exc:
                raise FileNotInPackError(file_path) from exc

    def open(self, file_path: str) -> PackedFile:
        """Open a stored file for decrypted reading."""
        offset, size = self.locate(file_path)
        return PackedFile(self.path, offset, size, encrypted=True)

    def __contains__(self, file_path: object) -> bool:
        if not isinstance(file_path, str):
            return False
        try:
            self.locate(file_path)
        except FileNotInPackError:
            return False
        return True


class FileLoader:
    """Resolves game file paths against mod overrides, a data pack or a folder."""

    def __init__(
        self,
        data_file: Optional[PathLike] = None,
        base_path: PathLike = "",
        overrides: Optional[Mapping[str, str]] = None,
        force_scripts: bool = False,
    ) -> None:
        self.base_path = os.fspath(base_path)
        self.overrides: Mapping[str, str] = overrides if overrides is not None else {}
        self.force_scripts = force_scripts
        self.pack: Optional[DataPack] = None
        if data_file is not None and os.path.isfile(data_file):
            self.pack = DataPack(data_file)

    @property
    def using_data_file(self) -> bool:
        return self.pack is not None

    def _local(self, file_path: str) -> str:
        return os.path.join(self.base_path, file_path) if self.base_path else file_path

    def open(self, file_path: str) -> PackedFile:
        """Open a game file; raises FileNotFoundError if it cannot be found."""
        override = self.overrides.get(file_path.lower())
        if override is not None:
            return PackedFile(override)
        if self.force_scripts and file_path.startswith("Data/Scripts/") and file_path.endswith("txt"):
            return PackedFile(self._local(file_path[5:]))
        if self.pack is not None:
            return self.pack.open(file_path)
        return PackedFile(self._local(file_path))

    def _exists(self, file_path: str) -> bool:
        try:
            self.open(file_path).close()
        except OSError:
            return False
        return True

    def bytecode_mode(self) -> Optional[BytecodeMode]:
        """Which compiled-script format is available, if any."""
        if self._exists(_GLOBAL_CODE_MOBILE):
            return BytecodeMode.MOBILE
        if self._exists(_GLOBAL_CODE_PC):
            return BytecodeMode.PC
        return None


def copy_file_path(path: str) -> str:
    """Return the path with forward slashes turned into backslashes."""
    return path.replace("/", "\\")