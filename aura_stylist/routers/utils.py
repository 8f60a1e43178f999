"""Helpers shared by the API routers."""

from fastapi import HTTPException

from aura_stylist.core.errors import StylistError


def http_error(exc: StylistError) -> HTTPException:
    """Convert a pipeline error into the HTTP error returned to the client."""
    return HTTPException(status_code=exc.status_code, detail=exc.to_detail())
