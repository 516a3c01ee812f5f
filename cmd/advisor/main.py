from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from flask import Flask

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(REPO_ROOT))

from internal.config.settings import settings_store
from internal.handlers.api import advisor_bp

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level = str(settings_store.get("logging", "level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=settings_store.get("logging", "format"),
    )


def create_app() -> Flask:
    app = Flask(__name__)
    app.register_blueprint(advisor_bp)
    return app


def run() -> None:
    configure_logging()
    host = settings_store.get("server", "host", "0.0.0.0")
    port = int(os.getenv("PORT", str(settings_store.get("server", "port", 8080))))

    app = create_app()
    logger.info("Replication advisor listening on http://%s:%d", host, port)
    app.run(host=host, port=port)


if __name__ == "__main__":
    run()
