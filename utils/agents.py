"""
Agent roster for the assignment editor.

Claude Code agents are markdown files in ``~/.claude/agents/<name>.md`` with a
frontmatter header (name, description, model, tools, color) followed by the
agent's prompt. Their names are the keys of the ``agents`` section of the
assignments document.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from utils.colored_logger import setup_logger
from utils.constants import PathConstants

logger = setup_logger(__name__)

DEFAULT_MODEL = "sonnet"

_AGENT_NAME_RE = re.compile(PathConstants.AGENT_NAME_PATTERN)
_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\n(.*?)^---[ \t]*\n?(.*)\Z", re.DOTALL | re.MULTILINE)


@dataclass(frozen=True)
class AgentInfo:
    name: str
    filename: str
    description: str = ""
    model: str = DEFAULT_MODEL
    tools: str = ""
    color: str = ""
    prompt: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "filename": self.filename,
            "description": self.description,
            "model": self.model,
            "tools": self.tools,
            "color": self.color,
            "prompt": self.prompt,
        }


def agent_filename(name: str) -> str:
    """
    File name for an agent name; whitespace runs become dashes.

    Raises:
        ValueError: If the name is empty or could leave the agents directory
    """
    if not isinstance(name, str) or not name.strip():
        raise ValueError("name required")
    slug = re.sub(r"\s+", "-", name.strip())
    if not _AGENT_NAME_RE.fullmatch(slug) or slug in (".", ".."):
        raise ValueError(f"Invalid agent name: {name!r}")
    return f"{slug}.md"


def _field(header: str, key: str) -> Optional[str]:
    match = re.search(rf"^{key}:[ \t]*(.+)$", header, re.MULTILINE)
    return match.group(1).strip() if match else None


def parse_agent(text: str, filename: str) -> AgentInfo:
    """Parse an agent file; missing fields get defaults, a missing header an empty prompt."""
    match = _FRONTMATTER_RE.match(text)
    header, prompt = (match.group(1), match.group(2)) if match else ("", "")
    return AgentInfo(
        name=_field(header, "name") or filename[: -len(".md")],
        filename=filename,
        description=_field(header, "description") or "",
        model=_field(header, "model") or DEFAULT_MODEL,
        tools=_field(header, "tools") or "",
        color=_field(header, "color") or "",
        prompt=prompt.strip(),
    )


def build_agent_content(
    name: str,
    description: str = "",
    model: str = DEFAULT_MODEL,
    tools: str = "",
    color: str = "",
    prompt: str = "",
) -> str:
    """Render an agent file; tools and color lines are only written when set."""
    lines = ["---", f"name: {name}", f"description: {description}", f"model: {model}"]
    if tools:
        lines.append(f"tools: {tools}")
    if color:
        lines.append(f"color: {color}")
    lines.extend(["---", "", prompt or ""])
    return "\n".join(lines)


def list_agents(agents_dir: Optional[Path] = None) -> List[AgentInfo]:
    """
    List agent definitions sorted by file name.

    Unreadable files are skipped; a missing directory yields an empty roster.
    """
    agents_dir = agents_dir or PathConstants.USER_AGENTS_DIR
    if not agents_dir.is_dir():
        return []

    agents: List[AgentInfo] = []
    for path in sorted(agents_dir.glob("*.md")):
        if not path.is_file():
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable agent file {path}: {e}")
            continue
        agents.append(parse_agent(text, path.name))
    return agents


def write_agent(
    name: str, content: str, agents_dir: Optional[Path] = None
) -> Path:
    """
    Write an agent file named after ``name``.

    Raises:
        ValueError: For an invalid agent name
        OSError: If the file cannot be written
    """
    agents_dir = agents_dir or PathConstants.USER_AGENTS_DIR
    path = agents_dir / agent_filename(name)
    agents_dir.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info(f"Saved agent {path.name}")
    return path


def delete_agent(name: str, agents_dir: Optional[Path] = None) -> None:
    """
    Delete an agent file.

    Raises:
        ValueError: For an invalid agent name
        FileNotFoundError: If no such agent exists
    """
    agents_dir = agents_dir or PathConstants.USER_AGENTS_DIR
    path = agents_dir / agent_filename(name)
    path.unlink()
    logger.info(f"Deleted agent {path.name}")
