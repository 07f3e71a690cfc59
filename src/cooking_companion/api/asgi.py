"""ASGI entrypoint for the cooking companion API."""

from cooking_companion.api.app import create_app
from cooking_companion.containers import build_container

app = create_app(build_container())
