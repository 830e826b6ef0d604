"""ASGI entrypoint for the deficit tracker API."""

from deficit_tracker.api.app import create_app
from deficit_tracker.containers import build_container

app = create_app(build_container())
