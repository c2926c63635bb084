"""Application lifecycle events."""

from recipe_share.core.events.lifespan import build_services, lifespan


__all__ = ["build_services", "lifespan"]
