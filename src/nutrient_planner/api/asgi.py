"""ASGI entrypoint for the nutrient planner API."""

from nutrient_planner.api.app import create_app
from nutrient_planner.containers import build_container

app = create_app(build_container())
