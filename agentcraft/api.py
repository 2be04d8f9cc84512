# FastAPI endpoints for the AgentCraft assignment editor
# Serves the assignments document, installed packs, skills, agents and host profiles

from pathlib import Path
from typing import Any, Dict, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel

from agentcraft.assignment_store import (
    AssignmentDocument,
    AssignmentStore,
    add_sound,
    clear_slot,
    remove_sound,
)
from agentcraft.types import Scope
from utils.agents import (
    DEFAULT_MODEL,
    build_agent_content,
    delete_agent,
    list_agents,
    write_agent,
)
from utils.colored_logger import setup_logger
from utils.constants import HTTPStatusConstants, PackConstants
from utils.hosts import HOST_PROFILES, all_host_ids, capabilities_for
from utils.packs import list_packs, list_sounds, resolve_pack_path, ui_sounds
from utils.skills import discover_skills
from utils.sound_player import dispatch_playback

logger = setup_logger(__name__)


class SlotEdit(BaseModel):
    """Pydantic model for adding or removing one sound at a slot."""

    scope: str
    event: str
    sound: Optional[str] = None


class Preview(BaseModel):
    sound: str
    volume: Optional[float] = None


class AgentData(BaseModel):
    """Pydantic model for creating or updating an agent definition."""

    name: Optional[str] = None
    description: str = ""
    model: str = DEFAULT_MODEL
    tools: str = ""
    color: str = ""
    prompt: str = ""

    def content(self, name: str) -> str:
        return build_agent_content(
            name=name,
            description=self.description,
            model=self.model,
            tools=self.tools,
            color=self.color,
            prompt=self.prompt,
        )


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=HTTPStatusConstants.BAD_REQUEST, detail=detail)


def _server_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=HTTPStatusConstants.INTERNAL_SERVER_ERROR, detail=detail
    )


def _parse_scope(text: str) -> Scope:
    try:
        return Scope.parse(text)
    except ValueError as e:
        raise _bad_request(str(e))


def create_app(
    store: Optional[AssignmentStore] = None,
    packs_root: Optional[Union[str, Path]] = None,
    user_skills_dir: Optional[Path] = None,
    plugins_json: Optional[Path] = None,
    player=None,
    lifespan=None,
    agents_dir: Optional[Path] = None,
) -> FastAPI:
    """Create FastAPI application with configured endpoints."""
    app = FastAPI(lifespan=lifespan)
    store = store or AssignmentStore()
    player = player or dispatch_playback

    def save(doc: Union[AssignmentDocument, Dict[str, Any]]) -> None:
        try:
            store.save(doc)
        except OSError as e:
            logger.error(f"Error writing assignments: {e}")
            raise _server_error("Failed to write assignments")

    def resolve_sound(ref: str) -> Path:
        path = resolve_pack_path(ref, packs_root)
        if path is None:
            raise _bad_request("Invalid path")
        if not path.is_file():
            raise HTTPException(
                status_code=HTTPStatusConstants.NOT_FOUND, detail="Sound not found"
            )
        return path

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "ok"}

    @app.get("/assignments")
    def get_assignments():
        """Current assignments, with defaults filled in."""
        return store.load_raw()

    @app.post("/assignments")
    def save_assignments(body: Dict[str, Any]):
        """Replace the whole document with the request body."""
        save(body)
        return {"ok": True}

    @app.put("/assignments/slot")
    def add_slot_sound(edit: SlotEdit):
        """Add a sound to a slot (a second sound makes it a random pick)."""
        if not edit.sound:
            raise _bad_request("sound is required")
        scope = _parse_scope(edit.scope)
        doc = store.load()
        try:
            add_sound(doc, scope, edit.event, edit.sound)
        except ValueError as e:
            raise _bad_request(str(e))
        save(doc)
        logger.info(f"Assigned {edit.sound} to {scope} {edit.event}")
        return doc.to_json_dict()

    @app.delete("/assignments/slot")
    def remove_slot_sound(edit: SlotEdit):
        """Remove one sound from a slot, or clear it when no sound is given."""
        scope = _parse_scope(edit.scope)
        doc = store.load()
        try:
            if edit.sound:
                remove_sound(doc, scope, edit.event, edit.sound)
            else:
                clear_slot(doc, scope, edit.event)
        except ValueError as e:
            raise _bad_request(str(e))
        save(doc)
        return doc.to_json_dict()

    @app.get("/packs")
    def get_packs():
        """Installed sound packs."""
        return [pack.to_dict() for pack in list_packs(packs_root)]

    @app.get("/sounds")
    def get_sounds():
        """Every sound reference across installed packs."""
        return list_sounds(packs_root)

    @app.get("/ui-sounds")
    def get_ui_sounds():
        return ui_sounds(packs_root)

    @app.get("/audio/{ref:path}")
    def get_audio(ref: str):
        """Stream a pack sound to the browser for in-page preview."""
        path = resolve_sound(ref)
        media_type = PackConstants.AUDIO_MEDIA_TYPES.get(
            path.suffix.lower(), "application/octet-stream"
        )
        return FileResponse(
            path,
            media_type=media_type,
            headers={"Cache-Control": "public, max-age=86400"},
        )

    @app.get("/skills")
    def get_skills():
        """User and plugin skills that can carry their own sounds."""
        return [
            skill.to_dict()
            for skill in discover_skills(user_skills_dir, plugins_json)
        ]

    @app.get("/agents")
    def get_agents():
        """Agent definitions that can carry their own sounds."""
        return [agent.to_dict() for agent in list_agents(agents_dir)]

    @app.post("/agents")
    def create_agent(data: AgentData):
        """Create an agent file; the file name is the lowercased name."""
        if not data.name or not data.name.strip():
            raise _bad_request("name required")
        try:
            path = write_agent(data.name.lower(), data.content(data.name), agents_dir)
        except ValueError as e:
            raise _bad_request(str(e))
        except OSError as e:
            logger.error(f"Error creating agent {data.name}: {e}")
            raise _server_error("Failed to create agent")
        return {"ok": True, "filename": path.name}

    @app.put("/agents/{name}")
    def update_agent(name: str, data: AgentData):
        """Rewrite an existing agent file."""
        try:
            write_agent(name, data.content(data.name or name), agents_dir)
        except ValueError as e:
            raise _bad_request(str(e))
        except OSError as e:
            logger.error(f"Error updating agent {name}: {e}")
            raise _server_error("Failed to update agent")
        return {"ok": True}

    @app.delete("/agents/{name}")
    def remove_agent(name: str):
        try:
            delete_agent(name, agents_dir)
        except ValueError as e:
            raise _bad_request(str(e))
        except FileNotFoundError:
            raise HTTPException(
                status_code=HTTPStatusConstants.NOT_FOUND, detail="Agent not found"
            )
        except OSError as e:
            logger.error(f"Error deleting agent {name}: {e}")
            raise _server_error("Failed to delete agent")
        return {"ok": True}

    @app.get("/hosts")
    def get_hosts():
        """Capability profiles of every supported host."""
        return [HOST_PROFILES[host_id].to_dict() for host_id in all_host_ids()]

    @app.get("/hosts/{host_id}")
    def get_host(host_id: str):
        """Capabilities of one host; unknown ids get the permissive profile."""
        return capabilities_for(host_id).to_dict()

    @app.post("/preview")
    def preview(request: Preview):
        """Play a sound reference once, at the given or master volume."""
        path = resolve_sound(request.sound)
        volume = request.volume
        if volume is None:
            volume = store.load().settings.master_volume
        try:
            player(path, volume)
        except Exception as e:
            logger.warning(f"Preview playback failed for {path}: {e}")
            raise _server_error("Failed to play sound")
        return {"ok": True}

    return app
