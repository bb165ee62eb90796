# tests/startup.py
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def run_tests_on_startup() -> bool:
    """
    Run pytest before starting the web app.

    Returns True if tests pass (or pytest isn't installed),
    False if they fail.

    Env:
        SKIP_STARTUP_TESTS - set to any value to skip the run.
    """
    import os

    if os.getenv("SKIP_STARTUP_TESTS"):
        return True

    try:
        import pytest
    except ImportError:
        logger.warning("pytest not installed; skipping startup tests.")
        return True

    logger.info("Running test suite before startup...")
    result = pytest.main(["-q", "tests"])

    if result != 0:
        logger.error("Tests FAILED (exit code %s); not starting server.", result)
        return False

    logger.info("Tests passed; starting server.")
    return True
