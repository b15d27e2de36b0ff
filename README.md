# rsdkcore

Building blocks for a retro 2D game engine, in plain Python with no third-party dependencies.

## Modules

- `rsdkcore.ini`: `IniParser`, a small INI reader and writer. Items keep the order in which they were read or set. `IniParser.parse(text)` and `IniParser.load(path)` read, and `dumps()` and `write(path)` write. Typed access goes through `get_string`, `get_integer`, `get_float` and `get_bool`, each of which returns its `default` when the key is missing, and through `set_string`, `set_integer`, `set_float`, `set_bool` and `set_comment`. Lines that start with `#` are skipped when reading. Comments set with `set_comment` are written as `; text`.
- `rsdkcore.trig`: fixed-point trigonometry lookups. `sin512` and `cos512` are scaled by 512 and `sin_m` and `cos_m` by 4096, both over 512 steps per turn. `sin256` and `cos256` use 256 steps. `arc_tan_lookup(x, y)` returns a byte angle with 256 steps per turn.
- `rsdkcore.reader`: reads encrypted data packs. `DataPack` reads the directory table. `DataPack.locate` and `DataPack.open` find and open a stored file, and a missing file raises `FileNotInPackError`. `PackedFile` decrypts as it reads and supports `read`, `tell`, `seek`, `at_end` and use as a context manager. `DataCipher` is the keystream itself. `FileLoader` opens a game path from a mod override, from the pack, or from a plain folder, and `bytecode_mode()` reports which compiled-script format (`BytecodeMode.MOBILE` or `BytecodeMode.PC`) is present. `copy_file_path` turns `/` into `\`.
- `rsdkcore.palette`: `PaletteBank` holds eight 256-colour palettes packed as RGB565 (`RenderType.SW`) or RGB5551 (`RenderType.HW`), together with the full 24-bit `PaletteEntry` colours. It supports loading from palette file bytes, per-line active palette selection, `copy`, `rotate`, `set_fade` and `set_limited_fade`. `rgb888_to_rgb565` and `rgb888_to_rgb5551` pack a single colour.
- `rsdkcore.controls`: button tracking. `InputButton` holds the press and hold state of one button. `InputState.update_buttons` advances one frame from the set of pressed `Button`s, and `check_key_press` and `check_key_down` copy that state into an `InputData`, selected by a bit mask. `axis_delta` and `trigger_delta` normalise analogue stick and trigger values.
- `rsdkcore.player`: the `Player` record and `process_player_control`. The function applies `ControlMode.NORMAL`, `NONE` or `SIDEKICK`. A sidekick replays the lead player's inputs from sixteen frames earlier, kept in `ControlBuffers`.
- `rsdkcore.haptics`: `HapticID` effect identifiers and `HapticQueue`, a one-slot queue. `queue(id)` is ignored while the queue is disabled, and `take()` returns the pending effect and clears the slot.
- `rsdkcore.mods`: `ModManager` finds mods under `<mods_path>mods`. Mods listed in `modconfig.ini` come first, then other mod folders follow as inactive. Each mod is read from its `mod.ini` into a `ModInfo`. `scan_mod_folder` collects replacement files from the mod's `Data`, `Scripts` and `Videos` folders. `save_mods` writes the order and active flags back to `modconfig.ini`. `settings()` returns the combined `ModSettings`, and `file_overrides()` returns the override map for `FileLoader`, where earlier mods win. `resolve_path` matches a path's last component without regard to case. `get_scene_id` finds a stage by name, ignoring spaces and case.

## Examples

Reading and writing a config:

```python
from rsdkcore.ini import IniParser

ini = IniParser.parse("[Window]\nFullScreen=true\nScale=2\n")
ini.get_bool("Window", "FullScreen", False)   # True
ini.get_integer("Window", "Scale", 1)         # 2
ini.set_integer("Window", "Scale", 3)
ini.write("settings.ini")
```

Reading a file from a data pack:

```python
from rsdkcore.reader import DataPack

pack = DataPack("Data.rsdk")
with pack.open("Data/Game/GameConfig.bin") as f:
    header = f.read(16)
```

Loading files with mod overrides applied:

```python
from rsdkcore.mods import ModManager
from rsdkcore.reader import FileLoader

manager = ModManager()
settings = manager.init_mods()
loader = FileLoader(
    data_file="Data.rsdk",
    overrides=manager.file_overrides(),
    force_scripts=settings.force_use_scripts,
)
```

Trig lookups:

```python
from rsdkcore.trig import cos512, sin512, arc_tan_lookup

sin512(0x80)            # 512
cos512(0)               # 512
arc_tan_lookup(1, 0)    # 0
```

## What this package does not do

This package is a set of libraries, not a playable engine. It has no command, no window, no rendering, no audio, no script interpreter and no game loop. It reads no keyboard or controller devices: `InputState` only tracks the buttons you report to it. Palettes are kept in memory and are never drawn.

## Tests

The tests use pytest and are installed with the `test` extra.