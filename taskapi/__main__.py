# taskapi/__main__.py
"""Run the task manager API with uvicorn."""

import logging

import uvicorn

from taskapi.config import Settings


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("taskapi.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
