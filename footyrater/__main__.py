"""Run the API server: python -m footyrater"""

import uvicorn

from footyrater.api import create_app
from footyrater.config import Settings
from footyrater.utilities.logging_setup import setup_logging


def main() -> None:
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
