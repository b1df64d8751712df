"""Application entry point for lireddit backend server."""

from lireddit.app import App
from lireddit.config import Config
from lireddit.logging import setup_logging
from lireddit.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
