from __future__ import annotations

import json
from pathlib import Path

from utils.skills import discover_skills, read_skill


def make_skill(root: Path, name: str, description: str | None = None) -> Path:
    skill_dir = root / name
    skill_dir.mkdir(parents=True)
    front = f"description: {description}\n" if description else ""
    (skill_dir / "SKILL.md").write_text(f"---\nname: {name}\n{front}---\nBody\n")
    return skill_dir


def test_read_skill(tmp_path: Path):
    skill = read_skill(make_skill(tmp_path, "deploy", "Ship it"), "ops")
    assert skill.qualified_name == "ops:deploy"
    assert skill.description == "Ship it"

    assert read_skill(make_skill(tmp_path, "bare")).description == "bare"
    (tmp_path / "empty").mkdir()
    assert read_skill(tmp_path / "empty") is None


def test_discover_user_and_plugin_skills(tmp_path: Path):
    user_dir = tmp_path / "skills"
    make_skill(user_dir, "ask", "Ask questions")
    (user_dir / "not-a-skill").mkdir()

    user_install = tmp_path / "cache" / "plugin-dev" / "user"
    project_install = tmp_path / "cache" / "plugin-dev" / "project"
    make_skill(user_install / "skills", "hook-development", "Hooks")
    make_skill(project_install / "skills", "other", "Should not be used")

    plugins_json = tmp_path / "installed_plugins.json"
    plugins_json.write_text(
        json.dumps(
            {
                "plugins": {
                    "plugin-dev@marketplace": [
                        {"scope": "project", "installPath": str(project_install)},
                        {"scope": "user", "installPath": str(user_install)},
                    ],
                    "broken@marketplace": "nope",
                }
            }
        )
    )

    skills = discover_skills(user_dir, plugins_json)
    assert [s.qualified_name for s in skills] == ["ask", "plugin-dev:hook-development"]
    assert skills[1].to_dict() == {
        "name": "hook-development",
        "qualifiedName": "plugin-dev:hook-development",
        "description": "Hooks",
        "namespace": "plugin-dev",
    }


def test_discover_without_sources(tmp_path: Path):
    assert discover_skills(tmp_path / "missing", tmp_path / "missing.json") == []


def test_undecodable_files_are_skipped(tmp_path: Path):
    user_dir = tmp_path / "skills"
    make_skill(user_dir, "good", "Fine")
    broken = user_dir / "broken"
    broken.mkdir()
    (broken / "SKILL.md").write_bytes(b"---\ndescription: \xff\xfe\n---\n")

    plugins_json = tmp_path / "installed_plugins.json"
    plugins_json.write_bytes(b'{"plugins": "\xff"}')

    assert [s.name for s in discover_skills(user_dir, plugins_json)] == ["good"]
