"""ASGI entrypoint for the Fityo API."""

from fityo.api.app import create_app
from fityo.containers import build_container

app = create_app(build_container())
