"""ASGI entrypoint for the coaching API."""

from macro_coach.api.app import create_app
from macro_coach.containers import build_container

app = create_app(build_container())
