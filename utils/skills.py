"""
Skill discovery for the assignment editor.

Skills come from two places: user skills in ``~/.claude/skills/<name>/SKILL.md``
and plugin skills listed by ``~/.claude/plugins/installed_plugins.json``.
Plugin skills are qualified as ``<plugin>:<skill>``, which is the key used in
the assignments document.
"""

import json
import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional

from utils.colored_logger import setup_logger
from utils.constants import PathConstants

logger = setup_logger(__name__)

_DESCRIPTION_RE = re.compile(r"^description:\s*(.+)$", re.MULTILINE)


@dataclass(frozen=True)
class SkillInfo:
    name: str
    qualified_name: str
    description: str
    namespace: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        data = asdict(self)
        return {
            "name": data["name"],
            "qualifiedName": data["qualified_name"],
            "description": data["description"],
            "namespace": data["namespace"],
        }


def read_skill(skill_dir: Path, namespace: Optional[str] = None) -> Optional[SkillInfo]:
    """Read a skill directory; None when it has no readable SKILL.md."""
    try:
        text = (skill_dir / "SKILL.md").read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    match = _DESCRIPTION_RE.search(text)
    name = skill_dir.name
    return SkillInfo(
        name=name,
        qualified_name=f"{namespace}:{name}" if namespace else name,
        description=match.group(1).strip() if match else name,
        namespace=namespace,
    )


def _plugin_install_paths(plugins_json: Path) -> List[tuple]:
    try:
        data = json.loads(plugins_json.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return []

    plugins = data.get("plugins") if isinstance(data, dict) else None
    if not isinstance(plugins, dict):
        return []

    result = []
    for plugin_key, installs in plugins.items():
        if not isinstance(installs, list) or not installs:
            continue
        installs = [i for i in installs if isinstance(i, dict)]
        # User-scope install preferred over project installs
        install = next((i for i in installs if i.get("scope") == "user"), None)
        if install is None and installs:
            install = installs[0]
        if not install or not install.get("installPath"):
            continue
        result.append((plugin_key.split("@")[0], Path(install["installPath"])))
    return result


def discover_skills(
    user_skills_dir: Optional[Path] = None, plugins_json: Optional[Path] = None
) -> List[SkillInfo]:
    """
    Discover user and plugin skills.

    The first skill found for a qualified name wins. The result is sorted by
    qualified name.
    """
    user_skills_dir = user_skills_dir or PathConstants.USER_SKILLS_DIR
    plugins_json = plugins_json or PathConstants.PLUGINS_JSON

    found: Dict[str, SkillInfo] = {}

    if user_skills_dir.is_dir():
        for entry in sorted(user_skills_dir.iterdir()):
            if not entry.is_dir():
                continue
            skill = read_skill(entry)
            if skill and skill.qualified_name not in found:
                found[skill.qualified_name] = skill

    for plugin_name, install_path in _plugin_install_paths(plugins_json):
        skills_dir = install_path / "skills"
        if not skills_dir.is_dir():
            continue
        for entry in sorted(skills_dir.iterdir()):
            if not entry.is_dir() or f"{plugin_name}:{entry.name}" in found:
                continue
            skill = read_skill(entry, plugin_name)
            if skill:
                found[skill.qualified_name] = skill

    logger.debug(f"Discovered {len(found)} skills")
    return [found[key] for key in sorted(found)]
