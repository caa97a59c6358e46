"""ASGI entrypoint for the storefront API."""

from photo_storefront.api.app import create_app
from photo_storefront.containers import build_container

app = create_app(build_container())
