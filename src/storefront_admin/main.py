"""Application entry point for the storefront admin backend."""

from storefront_admin.app import App
from storefront_admin.config import Config
from storefront_admin.logging import setup_logging
from storefront_admin.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
