#!/usr/bin/env python3
# app.py – HTTP entry point for the fenced tool-call runner

from __future__ import annotations

"""
Flask API around one conversation session.

You run:

    python3 app.py

API: http://127.0.0.1:8765/api/chat
"""

import logging
import os
from functools import partial

from dotenv import load_dotenv
from flask import Flask

from helpers.tools_prompt import build_system_prompt
from runner.tools import build_default_registry
from scribe.config import get_plugin_dir
from scribe.generator import OpenAIGenerator
from scribe.session import Session
from scribe.turn import run_turn
from tests.startup import run_tests_on_startup
from web.chat import create_chat_blueprint
from web.health import create_health_blueprint

# ---------------------------------------------------------------------------
# Env / logging
# ---------------------------------------------------------------------------

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("app")


# ---------------------------------------------------------------------------
# Flask app + blueprint registration
# ---------------------------------------------------------------------------

def create_app(registry=None, generate=None, session=None) -> Flask:
    """
    Build the Flask app. Every collaborator can be injected (tests do);
    defaults are the built-in registry, the OpenAI generator and a fresh session.
    """
    registry = registry if registry is not None else build_default_registry(
        plugin_dir=get_plugin_dir()
    )
    generate = generate if generate is not None else OpenAIGenerator()
    session = session if session is not None else Session(build_system_prompt(registry))

    flask_app = Flask(__name__)
    flask_app.register_blueprint(
        create_chat_blueprint(
            registry=registry,
            session=session,
            run_turn=partial(run_turn, session=session, registry=registry, generate=generate),
        )
    )
    flask_app.register_blueprint(create_health_blueprint(registry))
    logger.info("Session %s ready with %d tools", session.session_id, len(registry))
    return flask_app


# ---------------------------------------------------------------------------
# Run tests before starting server
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    if run_tests_on_startup():
        app = create_app()
        logger.info("API starting on http://127.0.0.1:8765/api/chat")
        app.run(host="127.0.0.1", port=8765)
