"""Service container for dependency injection."""

from best_ball_rosters.services.container import (
    ServiceConfig,
    ServiceContainer,
    get_container,
    set_container,
)

__all__ = [
    "ServiceConfig",
    "ServiceContainer",
    "get_container",
    "set_container",
]
