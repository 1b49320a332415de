"""Application entry point for the Pala Pizza ordering backend."""

from palapizza.app import App
from palapizza.config import Config
from palapizza.logging import setup_logging
from palapizza.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
