"""
ASGI entrypoint: ``uvicorn crud_gateway.main:app``.
"""
from crud_gateway.api.fastapi import create_app
from crud_gateway.app.core.logging import setup_logging

setup_logging()

app = create_app()
