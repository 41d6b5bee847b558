"""Application layer ports (aka interfaces)."""

from quire.application.ports.identity import CurrentUser

__all__ = ["CurrentUser"]
