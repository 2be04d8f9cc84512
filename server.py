#!/usr/bin/env -S uv run --script
# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "uvicorn",
#     "fastapi",
#     "pydantic",
#     "python-dotenv",
#     "pyyaml",
#     "pygame",
# ]
# ///

# Assignment editor API server for AgentCraft
# Serves the shared assignments document to the dashboard

import sys
from contextlib import asynccontextmanager

import uvicorn

from agentcraft.api import create_app
from agentcraft.assignment_store import AssignmentStore
from config import config
from utils.colored_logger import configure_root_logging, setup_logger
from utils.constants import get_server_url

configure_root_logging(log_file=config.log_file or None)
logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app):
    """Manage application lifecycle for startup and shutdown."""
    logger.info(f"Assignments file: {config.assignments_path}")
    logger.info(f"Packs directory: {config.packs_dir}")
    logger.info(f"Dashboard API listening on {get_server_url(config.port)}")
    yield
    logger.info("Server shutdown complete")


app = create_app(
    store=AssignmentStore(config.assignments_path),
    packs_root=config.packs_dir,
    lifespan=lifespan,
)

if __name__ == "__main__":
    # Check if we're in development mode (with --reload flag or specific argument)
    reload = "--reload" in sys.argv or "--dev" in sys.argv

    if reload:
        uvicorn.run(
            "server:app",  # Use string import for reload to work
            host=config.host,
            port=config.port,
            reload=True,
            reload_dirs=[".", "agentcraft", "utils"],
        )
    else:
        uvicorn.run(app, host=config.host, port=config.port)
