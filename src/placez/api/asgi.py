"""ASGI entrypoint for the placez API."""

from placez.api.app import create_app
from placez.containers import build_container

app = create_app(build_container())
