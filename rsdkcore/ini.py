"""Minimal INI reader and writer used for engine and mod settings."""

from __future__ import annotations

import math
import os
import re
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional, Union

_WS = " \t\n\v\f\r"
_SECTION_RE = re.compile(r"\[([^\[\]]+)")
_ENTRY_RE = re.compile(r"([^;=]+)=[" + _WS + r"]*([^\t\r\n]+)")
_INT_RE = re.compile(r"[" + _WS + r"]*([+-]?[0-9]+)")
_FLOAT_RE = re.compile(
    r"[" + _WS + r"]*([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

PathLike = Union[str, "os.PathLike[str]"]


class ItemType(IntEnum):
    """How an item is written back out."""

    STRING = 0
    INT = 1
    FLOAT = 2
    BOOL = 3
    COMMENT = 4


@dataclass
class ConfigItem:
    """One key/value pair (or comment) of an INI document."""

    section: str = ""
    key: str = ""
    value: str = ""
    has_section: bool = False
    type: ItemType = ItemType.STRING


def _lines(text: str) -> Iterator[str]:
    """Yield lines with their trailing newline kept."""
    start = 0
    while True:
        end = text.find("\n", start)
        if end < 0:
            yield text[start:]
            return
        yield text[start : end + 1]
        start = end + 1


def _atoi(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def _to_single(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class IniParser:
    """An ordered list of INI items with typed access."""

    def __init__(self) -> None:
        self.items: list[ConfigItem] = []

    @classmethod
    def parse(cls, text: str) -> "IniParser":
        """Build a parser from INI text."""
        parser = cls()
        section = ""
        has_section = False
        for line in _lines(text):
            if line.startswith("#"):
                continue
            match = _SECTION_RE.match(line)
            if match:
                section = match.group(1)
                has_section = True
                continue
            match = _ENTRY_RE.match(line)
            if match:
                parser.items.append(
                    ConfigItem(
                        section=section if has_section else "",
                        key=match.group(1),
                        value=match.group(2),
                        has_section=has_section,
                    )
                )
        return parser

    @classmethod
    def load(cls, path: PathLike) -> "IniParser":
        """Read and parse an INI file; raises OSError if it cannot be opened."""
        with open(path, encoding="utf-8", newline="") as handle:
            return cls.parse(handle.read())

    def _find(self, section: str, key: str) -> Optional[ConfigItem]:
        return next(
            (item for item in self.items if item.section == section and item.key == key),
            None,
        )

    def get_string(self, section: str, key: str, default: Optional[str] = None) -> Optional[str]:
        item = self._find(section, key)
        return item.value if item else default

    def get_integer(self, section: str, key: str, default: Optional[int] = None) -> Optional[int]:
        item = self._find(section, key)
        return _atoi(item.value) if item else default

    def get_float(self, section: str, key: str, default: Optional[float] = None) -> Optional[float]:
        item = self._find(section, key)
        return _atof(item.value) if item else default

    def get_bool(self, section: str, key: str, default: Optional[bool] = None) -> Optional[bool]:
        item = self._find(section, key)
        if item is None:
            return default
        return item.value.lower() == "true" or item.value == "1"

    def _set(self, section: str, key: str, value: str, item_type: ItemType) -> None:
        item = self._find(section, key)
        if item is None:
            item = ConfigItem()
            self.items.append(item)
        item.section = section
        item.key = key
        item.value = value
        item.type = item_type

    def set_string(self, section: str, key: str, value: str) -> None:
        self._set(section, key, value, ItemType.STRING)

    def set_integer(self, section: str, key: str, value: int) -> None:
        self._set(section, key, str(int(value)), ItemType.INT)

    def set_float(self, section: str, key: str, value: float) -> None:
        self._set(section, key, f"{_to_single(float(value)):.6f}", ItemType.FLOAT)

    def set_bool(self, section: str, key: str, value: bool) -> None:
        self._set(section, key, "true" if value else "false", ItemType.BOOL)

    def set_comment(self, section: str, key: str, comment: str) -> None:
        self._set(section, key, comment, ItemType.COMMENT)

    @staticmethod
    def _format(item: ConfigItem) -> str:
        if item.type == ItemType.COMMENT:
            return f"; {item.value}\n"
        return f"{item.key}={item.value}\n"

    def dumps(self) -> str:
        """Render the items as INI text.

        Sectionless items come first. Section headers follow in the order of
        consecutive runs of item sections; a final run repeating the first
        section is dropped.
        """
        sections: list[str] = []
        past = ""
        for item in self.items:
            if item.section != past:
                past = item.section
                sections.append(past)
        if len(sections) > 1 and sections[0] == sections[-1]:
            sections.pop()

        out = [self._format(item) for item in self.items if item.section == ""]
        out.append("\n")
        for position, name in enumerate(sections):
            out.append(f"[{name}]\n")
            out.extend(self._format(item) for item in self.items if item.section == name)
            if position + 1 < len(sections):
                out.append("\n")
        return "".join(out)

    def write(self, path: PathLike) -> None:
        """Write the items to a file; raises OSError if it cannot be opened."""
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(self.dumps())