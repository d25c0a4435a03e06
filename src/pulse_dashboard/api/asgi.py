"""ASGI entrypoint for the dashboard API."""

from pulse_dashboard.api.app import create_app
from pulse_dashboard.containers import build_container

app = create_app(build_container())
