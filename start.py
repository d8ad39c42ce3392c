#!/usr/bin/env python3
"""
Apply the schema migrations, then serve the tournament API
"""
import subprocess

from core.config import settings
from core.logging import logger


def run_migrations() -> bool:
    """Bring the participants/matches schema up to the latest revision"""
    logger.info("Running database migrations...")
    try:
        result = subprocess.run(
            ["alembic", "upgrade", "head"],
            check=True,
            capture_output=True,
            text=True
        )
    except subprocess.CalledProcessError as e:
        logger.error(f"Migrations failed: {e.stderr}")
        return False

    if result.stdout:
        logger.info(result.stdout.strip())
    logger.info("Migrations completed")
    return True


def start_server():
    logger.info(f"Starting tournament API on {settings.host}:{settings.port}")
    subprocess.run([
        "uvicorn",
        "main:app",
        "--host", settings.host,
        "--port", str(settings.port),
        "--log-level", settings.log_level.lower(),
    ])


if __name__ == "__main__":
    # The app falls back to create_all on startup
    if not run_migrations():
        logger.warning("Starting server without migrations")

    start_server()
