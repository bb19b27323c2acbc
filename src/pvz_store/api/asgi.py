"""ASGI entrypoint for the PVZ store API."""

from pvz_store.api.app import create_app
from pvz_store.containers import build_container

app = create_app(build_container())
