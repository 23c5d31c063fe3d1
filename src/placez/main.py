"""Command-line entrypoint that serves the API with uvicorn."""

from uvicorn import Config, Server

from placez.api.app import create_app
from placez.config import Settings
from placez.containers import build_container


def main() -> None:
    """Serve the API on the configured host and port."""
    settings = Settings()
    app = create_app(build_container(settings))
    config = Config(app=app, host=settings.host, port=settings.port, log_level="info")
    Server(config).run()


if __name__ == "__main__":
    main()
