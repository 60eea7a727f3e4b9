"""Entry point for uvicorn/gunicorn: ``uvicorn clubapi.app_factory:app``."""
from clubapi.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
