"""Indexed colour palettes with RGB565/RGB5551 packing, fades and rotation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

PALETTE_COUNT = 8
PALETTE_SIZE = 256
SCREEN_YSIZE = 240

_ACTIVE = 0xFF


class RenderType(Enum):
    """Whether colours are packed for the software or the hardware renderer."""

    SW = auto()
    HW = auto()


@dataclass(frozen=True)
class PaletteEntry:
    """A full 24-bit colour."""

    r: int = 0
    g: int = 0
    b: int = 0


def rgb888_to_rgb565(r: int, g: int, b: int) -> int:
    """Pack an 8-bit-per-channel colour into RGB565."""
    return (b >> 3) | ((g >> 2) << 5) | ((r >> 3) << 11)


def rgb888_to_rgb5551(r: int, g: int, b: int) -> int:
    """Pack an 8-bit-per-channel colour into RGB5551 with the alpha bit clear."""
    return ((b >> 3) << 1) | ((g >> 3) << 6) | ((r >> 3) << 11)


class PaletteBank:
    """Eight 256-colour palettes plus the state of which one is active."""

    def __init__(self, render_type: RenderType = RenderType.SW) -> None:
        self.render_type = render_type
        self.palettes: list[list[int]] = [[0] * PALETTE_SIZE for _ in range(PALETTE_COUNT)]
        self.palettes32: list[list[PaletteEntry]] = [
            [PaletteEntry()] * PALETTE_SIZE for _ in range(PALETTE_COUNT)
        ]
        self.active_index = 0
        self.line_buffer: list[int] = [0] * SCREEN_YSIZE
        self.tex_palette_num = 0
        self.palette_mode = 0
        self.fade_mode = 0
        self.fade_r = 0
        self.fade_g = 0
        self.fade_b = 0
        self.fade_a = 0

    @property
    def active_palette(self) -> list[int]:
        return self.palettes[self.active_index]

    @property
    def active_palette32(self) -> list[PaletteEntry]:
        return self.palettes32[self.active_index]

    def _pack(self, r: int, g: int, b: int) -> int:
        if self.render_type == RenderType.HW:
            return rgb888_to_rgb5551(r, g, b)
        return rgb888_to_rgb565(r, g, b)

    def load(
        self,
        data: bytes,
        palette_id: int,
        start_palette_index: int,
        start_index: int,
        end_index: int,
    ) -> None:
        """Read RGB triplets ``start_index`` to ``end_index`` from a palette file's bytes."""
        if palette_id >= PALETTE_COUNT or palette_id < 0:
            palette_id = 0
        target = palette_id if palette_id else _ACTIVE
        for offset, colour_index in enumerate(range(start_index, end_index)):
            start = colour_index * 3
            colour = data[start : start + 3]
            if len(colour) < 3:
                raise ValueError(f"palette data ends before colour {colour_index}")
            self.set_entry(target, start_palette_index + offset, colour[0], colour[1], colour[2])

    def set_active(self, palette_id: int, start_line: int, end_line: int) -> None:
        """Select the palette used for a range of screen lines (or for textures)."""
        if self.render_type == RenderType.SW:
            if 0 <= palette_id < PALETTE_COUNT:
                for line in range(max(start_line, 0), min(end_line, SCREEN_YSIZE)):
                    self.line_buffer[line] = palette_id
            self.active_index = self.line_buffer[0]
        elif 0 <= palette_id < PALETTE_COUNT:
            self.tex_palette_num = palette_id

    def set_entry(self, palette_index: int, index: int, r: int, g: int, b: int) -> None:
        """Set one colour; palette index -1 (0xFF) means the active palette."""
        palette_index &= 0xFF
        index &= 0xFF
        if palette_index == _ACTIVE:
            palette_index = self.active_index
        elif palette_index >= PALETTE_COUNT:
            raise IndexError(f"palette {palette_index} out of range")
        r, g, b = r & 0xFF, g & 0xFF, b & 0xFF
        packed = self._pack(r, g, b)
        if self.render_type == RenderType.HW and index:
            packed |= 1
        self.palettes[palette_index][index] = packed
        self.palettes32[palette_index][index] = PaletteEntry(r, g, b)

    def copy(self, src: int, dest: int) -> None:
        """Copy one whole palette over another; out-of-range ids do nothing."""
        if 0 <= src < PALETTE_COUNT and 0 <= dest < PALETTE_COUNT:
            self.palettes[dest] = list(self.palettes[src])
            self.palettes32[dest] = list(self.palettes32[src])

    def rotate(self, start_index: int, end_index: int, right: bool) -> None:
        """Cycle the active palette's colours between two indices by one step."""
        start, end = start_index & 0xFF, end_index & 0xFF
        for colours in (self.active_palette, self.active_palette32):
            if right:
                saved = colours[end]
                colours[start + 1 : end + 1] = colours[start:end]
                colours[start] = saved
            else:
                saved = colours[start]
                colours[start:end] = colours[start + 1 : end + 1]
                colours[end] = saved

    def set_fade(self, r: int, g: int, b: int, alpha: int) -> None:
        """Request a full-screen fade towards a colour."""
        self.fade_mode = 1
        self.fade_r = r & 0xFF
        self.fade_g = g & 0xFF
        self.fade_b = b & 0xFF
        self.fade_a = min(alpha & 0xFFFF, 0xFF)

    def set_limited_fade(
        self,
        palette_id: int,
        r: int,
        g: int,
        b: int,
        alpha: int,
        start_index: int,
        end_index: int,
    ) -> None:
        """Blend a range of a palette towards a colour and make it active."""
        if palette_id >= PALETTE_COUNT or palette_id < 0:
            return
        self.palette_mode = 1
        self.active_index = palette_id
        alpha &= 0xFFFF
        if alpha >= 0x100:
            alpha = 0xFF
        if start_index >= end_index:
            return
        inverse = 0xFF - alpha
        packed_list = self.palettes[palette_id]
        full_list = self.palettes32[palette_id]
        for i in range(start_index, end_index):
            base = full_list[i]
            nr = ((r * alpha + inverse * base.r) & 0xFFFF) >> 8
            ng = ((g * alpha + inverse * base.g) & 0xFFFF) >> 8
            nb = ((b * alpha + inverse * base.b) & 0xFFFF) >> 8
            packed_list[i] = self._pack(nr, ng, nb)
            if self.render_type == RenderType.HW:
                full_list[i] = PaletteEntry(nr, ng, nb)
                packed_list[i] |= 1