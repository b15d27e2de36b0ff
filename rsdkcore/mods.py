"""Mod discovery, per-mod settings and file overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Union

from rsdkcore.ini import IniParser

PLAYERNAME_COUNT = 0x10

PathLike = Union[str, "os.PathLike[str]"]

_log = logging.getLogger(__name__)

_SCAN_FOLDERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Data", ("Data/", "Data\\", "data/", "data\\")),
    ("Scripts", ("Scripts/", "Scripts\\", "scripts/", "scripts\\")),
    ("Videos", ("Videos/", "Videos\\", "videos/", "videos\\")),
)


@dataclass
class ModInfo:
    """What is known about one mod folder."""

    name: str = ""
    desc: str = ""
    author: str = ""
    version: str = ""
    file_map: dict[str, str] = field(default_factory=dict)
    folder: str = ""
    use_scripts: bool = False
    disable_focus_pause: int = 0
    redirect_save: bool = False
    disable_save_ini_override: bool = False
    save_path: str = ""
    active: bool = False


@dataclass
class ModSettings:
    """Engine settings after the active mods have been applied."""

    force_use_scripts: bool = False
    disable_focus_pause: int = 0
    redirect_save: bool = False
    disable_save_ini_override: bool = False
    save_path: str = ""


def resolve_path(given: PathLike) -> Path:
    """Find an existing entry matching ``given`` ignoring case, else return it as is."""
    path = Path(given)
    if not path.is_absolute():
        path = Path.cwd() / path
    wanted = path.name.lower()
    try:
        for entry in path.parent.iterdir():
            if entry.name.lower() == wanted:
                return entry
    except OSError:
        pass
    return path


def _is_dir(path: Path) -> bool:
    return path.exists() and path.is_dir()


class ModManager:
    """Keeps the ordered list of mods found under ``<mods_path>mods``."""

    def __init__(
        self,
        mods_path: PathLike = "",
        force_scripts: bool = False,
        disable_focus_pause: int = 0,
    ) -> None:
        self.mods_path = os.fspath(mods_path)
        self.force_scripts = force_scripts
        self.disable_focus_pause = int(disable_focus_pause)
        self.mods: list[ModInfo] = []

    def _mods_dir(self) -> Path:
        return resolve_path(os.path.join(self.mods_path, "mods"))

    def init_mods(self) -> ModSettings:
        """Rescan the mods folder: configured mods first, then any others, inactive."""
        self.mods = []
        mods_dir = self._mods_dir()
        if _is_dir(mods_dir):
            config_path = mods_dir / "modconfig.ini"
            if config_path.is_file():
                config = IniParser.load(config_path)
                for item in config.items:
                    active = bool(config.get_bool("mods", item.key, False))
                    info = self.load_mod(item.key, active)
                    if info is not None:
                        self.mods.append(info)
            try:
                known = {mod.folder for mod in self.mods}
                for entry in sorted(mods_dir.iterdir(), key=lambda p: p.name):
                    if entry.is_dir() and entry.name not in known:
                        info = self.load_mod(entry.name, False)
                        if info is not None:
                            self.mods.append(info)
                            known.add(info.folder)
            except OSError as error:
                _log.error("Mods Folder Scanning Error: %s", error)
        return self.settings()

    def load_mod(self, folder: str, active: bool) -> Optional[ModInfo]:
        """Read ``mod.ini`` of a mod folder; None if the folder holds none."""
        ini_path = self._mods_dir() / folder / "mod.ini"
        try:
            settings = IniParser.load(ini_path)
        except OSError:
            return None

        info = ModInfo(
            name="Unnamed Mod",
            desc="",
            author="Unknown Author",
            version="1.0.0",
            folder=folder,
            active=active,
        )
        for attr, key in (("name", "Name"), ("desc", "Description"), ("author", "Author"), ("version", "Version")):
            value = settings.get_string("", key, "")
            if value:
                setattr(info, attr, value)

        self.scan_mod_folder(info)

        info.use_scripts = bool(settings.get_bool("", "TxtScripts", False))
        info.disable_focus_pause = int(settings.get_integer("", "DisableFocusPause", 0))
        info.redirect_save = bool(settings.get_bool("", "RedirectSaveRAM", False))
        if info.redirect_save:
            info.save_path = f"mods/{folder}/"
        info.disable_save_ini_override = bool(settings.get_bool("", "DisableSaveIniOverride", False))
        return info

    def scan_mod_folder(self, info: ModInfo) -> None:
        """Collect the replacement files under the mod's Data, Scripts and Videos folders."""
        mod_dir = str(self._mods_dir()) + "/" + info.folder
        for sub, tokens in _SCAN_FOLDERS:
            root = resolve_path(mod_dir + "/" + sub)
            if not _is_dir(root):
                continue

            def _report(error: OSError, sub: str = sub) -> None:
                _log.error("%s Folder Scanning Error: %s", sub, error)

            for dirpath, dirnames, filenames in os.walk(root, onerror=_report):
                dirnames.sort()
                for filename in sorted(filenames):
                    full = os.path.join(dirpath, filename)
                    if not os.path.isfile(full):
                        continue
                    position = next(
                        (pos for pos in (full.find(token) for token in tokens) if pos >= 0),
                        -1,
                    )
                    if position < 0:
                        continue
                    key = full[position:].replace("\\", "/").lower()
                    info.file_map.setdefault(key, full)

    def save_mods(self) -> None:
        """Write the mod order and active flags to ``modconfig.ini``."""
        mods_dir = self._mods_dir()
        if not _is_dir(mods_dir):
            return
        config = IniParser()
        for info in self.mods:
            config.set_bool("mods", info.folder, info.active)
        config.write(mods_dir / "modconfig.ini")

    def settings(self) -> ModSettings:
        """Combine the configured defaults with what the active mods ask for."""
        result = ModSettings(
            force_use_scripts=self.force_scripts,
            disable_focus_pause=self.disable_focus_pause,
        )
        for info in self.mods:
            if not info.active:
                continue
            if info.use_scripts:
                result.force_use_scripts = True
            if info.disable_focus_pause:
                result.disable_focus_pause |= info.disable_focus_pause
            if info.redirect_save:
                result.save_path = info.save_path
                result.redirect_save = True
            if info.disable_save_ini_override:
                result.disable_save_ini_override = True
        return result

    def file_overrides(self) -> dict[str, str]:
        """Lower-case game paths mapped to replacement files; earlier mods win."""
        overrides: dict[str, str] = {}
        for info in self.mods:
            if info.active:
                for key, path in info.file_map.items():
                    overrides.setdefault(key, path)
        return overrides


def get_scene_id(list_id: int, scene_name: str, stage_names: Sequence[str]) -> int:
    """Index of a stage whose name matches, ignoring spaces and case; -1 if none."""
    if not 0 <= list_id < 3:
        return -1
    wanted = scene_name.replace(" ", "").lower()
    return next(
        (index for index, name in enumerate(stage_names) if name.replace(" ", "").lower() == wanted),
        -1,
    )