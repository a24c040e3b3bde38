"""ASGI entrypoint for the grocery nutrition API."""

from grocery_nutrition.api.app import create_app
from grocery_nutrition.containers import build_container

app = create_app(build_container())
