"""Top-level ASGI entrypoint (``uvicorn main:app``)."""

from cookidoo_skill.api_factory import create_app

app = create_app()


__all__ = ["app"]
