from __future__ import annotations

import logging

import uvicorn

from src.core.config import settings
from src.interfaces.api import create_app


logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


if __name__ == "__main__":
    uvicorn.run("src.server:app", host=settings.api_host, port=settings.api_port)
