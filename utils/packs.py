"""
Sound pack layout helpers.

Packs live under ``<packs_root>/<publisher>/<name>/``. A sound reference is
either pack-qualified (``publisher/name:internal/path.mp3``) or a legacy bare
path that belongs to the default pack. Resolution is a pure mapping: it never
touches the filesystem, so callers check existence right before playback.
"""

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from utils.colored_logger import setup_logger
from utils.constants import PackConstants, get_packs_dir

logger = setup_logger(__name__)

_SEGMENT_SPLIT = re.compile(r"[\\/]")
_PACK_ID_RE = re.compile(PackConstants.PACK_ID_PATTERN)


@dataclass(frozen=True)
class Pack:
    """An installed sound pack."""

    publisher: str
    name: str
    path: Path
    description: Optional[str] = None
    version: Optional[str] = None

    @property
    def id(self) -> str:
        return f"{self.publisher}/{self.name}"

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "id": self.id,
            "publisher": self.publisher,
            "name": self.name,
            "description": self.description,
            "version": self.version,
        }


@dataclass(frozen=True)
class PackFile:
    """An audio file inside a pack, addressed by its pack-qualified reference."""

    reference: str
    path: Path
    pack_id: str = ""
    internal: str = ""
    segments: Tuple[str, ...] = field(default=())


def _has_traversal(part: str) -> bool:
    return any(segment == ".." for segment in _SEGMENT_SPLIT.split(part))


def _is_absolute(part: str) -> bool:
    return part.startswith(("/", "\\"))


def split_reference(ref: str) -> Optional[Tuple[str, str, str]]:
    """
    Split a sound reference into (publisher, name, internal).

    Returns None for references that are empty, incomplete or that try to
    climb out of their pack directory. Publisher and name must form a valid
    pack id, so neither can be absolute or hold a path separator.
    """
    if not isinstance(ref, str) or not ref:
        return None

    if ":" in ref:
        pack_id, internal = ref.split(":", 1)
        parsed = parse_pack_id(pack_id)
        if parsed is None:
            return None
        publisher, name = parsed
    else:
        publisher = PackConstants.DEFAULT_PUBLISHER
        name = PackConstants.DEFAULT_PACK_NAME
        internal = ref

    if not internal or _is_absolute(internal) or _has_traversal(internal):
        return None
    return publisher, name, internal


def _is_inside(path: Path, root: Path) -> bool:
    return Path(os.path.normpath(path)).is_relative_to(os.path.normpath(root))


def resolve_pack_path(
    ref: str, packs_root: Optional[Union[str, Path]] = None
) -> Optional[Path]:
    """
    Map a sound reference to its absolute location under the packs root.

    Args:
        ref: ``publisher/name:internal/path`` or a legacy ``internal/path``
        packs_root: Root of the pack tree (default: ~/.agentcraft/packs)

    Returns:
        Path or None: Composed path, or None when the reference is rejected
    """
    parts = split_reference(ref)
    if parts is None:
        if ref:
            logger.debug(f"Rejected sound reference: {ref!r}")
        return None

    publisher, name, internal = parts
    root = Path(packs_root) if packs_root is not None else get_packs_dir()
    path = root / publisher / name / internal
    if not _is_inside(path, root / publisher / name):
        logger.debug(f"Rejected sound reference outside its pack: {ref!r}")
        return None
    return path


def parse_pack_id(pack_id: str) -> Optional[Tuple[str, str]]:
    """Validate a ``publisher/name`` pack id and split it."""
    if not isinstance(pack_id, str) or not _PACK_ID_RE.fullmatch(pack_id):
        return None
    publisher, name = pack_id.split("/", 1)
    if publisher in (".", "..") or name in (".", ".."):
        return None
    return publisher, name


def _read_manifest(pack_path: Path) -> Dict[str, Optional[str]]:
    manifest_path = pack_path / PackConstants.MANIFEST_FILENAME
    if not manifest_path.is_file():
        return {}
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable pack manifest {manifest_path}: {e}")
        return {}
    if not isinstance(data, dict):
        return {}
    return {
        "description": data.get("description"),
        "version": data.get("version"),
    }


def list_packs(packs_root: Optional[Union[str, Path]] = None) -> List[Pack]:
    """
    Discover installed packs (``<publisher>/<name>`` directories).

    Returns:
        list: Packs sorted by id; empty when the packs root does not exist
    """
    root = Path(packs_root) if packs_root is not None else get_packs_dir()
    if not root.is_dir():
        return []

    packs: List[Pack] = []
    for publisher_dir in sorted(root.iterdir()):
        if not publisher_dir.is_dir():
            continue
        for pack_dir in sorted(publisher_dir.iterdir()):
            if not pack_dir.is_dir():
                continue
            manifest = _read_manifest(pack_dir)
            packs.append(
                Pack(
                    publisher=publisher_dir.name,
                    name=pack_dir.name,
                    path=pack_dir,
                    description=manifest.get("description"),
                    version=manifest.get("version"),
                )
            )
    return packs


def walk_pack_dir(pack: Pack, subdir: str = "") -> List[PackFile]:
    """
    List audio files inside a pack as pack-qualified references.

    Args:
        pack: Pack to scan
        subdir: Optional sub-directory of the pack to restrict the scan to

    Returns:
        list: Files sorted by reference
    """
    start = pack.path / subdir if subdir else pack.path
    if not start.is_dir():
        return []

    files: List[PackFile] = []
    for path in start.rglob("*"):
        if not path.is_file():
            continue
        if path.suffix.lower() not in PackConstants.AUDIO_EXTENSIONS:
            continue
        internal = path.relative_to(pack.path).as_posix()
        files.append(
            PackFile(
                reference=f"{pack.id}:{internal}",
                path=path,
                pack_id=pack.id,
                internal=internal,
                segments=tuple(internal.split("/")),
            )
        )
    return sorted(files, key=lambda f: f.reference)


def list_sounds(packs_root: Optional[Union[str, Path]] = None) -> List[Dict[str, str]]:
    """
    Every audio file of every installed pack, with its browsing category.

    The category is the pack id plus the folders above the file's parent; the
    subcategory is the parent folder itself.
    """
    sounds: List[Dict[str, str]] = []
    for pack in list_packs(packs_root):
        for pack_file in walk_pack_dir(pack):
            parts = pack_file.segments
            if len(parts) > 2:
                category = f"{pack.id}:{'/'.join(parts[:-2])}"
                subcategory = parts[-2]
            else:
                category = f"{pack.id}:{parts[0]}"
                subcategory = ""
            sounds.append(
                {
                    "id": pack_file.reference.rsplit(".", 1)[0],
                    "filename": parts[-1],
                    "category": category,
                    "subcategory": subcategory,
                    "path": pack_file.reference,
                }
            )
    return sounds


def ui_sounds(packs_root: Optional[Union[str, Path]] = None) -> List[Dict[str, str]]:
    """List interface sounds (files under each pack's ``ui/`` folder)."""
    results: List[Dict[str, str]] = []
    for pack in list_packs(packs_root):
        for pack_file in walk_pack_dir(pack, PackConstants.UI_DIRNAME):
            parts = pack_file.segments
            group = parts[1] if len(parts) > 2 else ""
            results.append(
                {
                    "path": pack_file.reference,
                    "filename": parts[-1],
                    "group": group,
                }
            )
    return results
