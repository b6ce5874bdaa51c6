"""Master module - dynamic route aggregator for FastAPI."""

from importlib.metadata import entry_points
from typing import Callable, cast

from fastapi import APIRouter
from loguru import logger

from .common.job_repository import JobRepository
from .common.job_storage import JobStorage
from .common.user import UserLike

ROUTE_ENTRY_POINT_GROUP = "cl_crop_resize.routes"

RouteFactory = Callable[
    [JobRepository, JobStorage, Callable[[], UserLike | None]],
    APIRouter,
]


def create_master_router(
    repository: JobRepository,
    file_storage: JobStorage,
    get_current_user: Callable[[], UserLike | None],
) -> APIRouter:
    """Combine the routers of every plugin registered under cl_crop_resize.routes.

    Args:
        repository: JobRepository implementation for job persistence
        file_storage: JobStorage implementation for uploads and outputs
        get_current_user: FastAPI dependency returning the user, or None

    Raises:
        RuntimeError: If a plugin fails to load

    Example:
        app = FastAPI()
        app.include_router(
            create_master_router(repository, LocalJobStorage("./media"), get_current_user),
            prefix="/api",
        )
    """
    master = APIRouter()

    for ep in entry_points(group=ROUTE_ENTRY_POINT_GROUP):
        try:
            create_router = cast(RouteFactory, ep.load())
            plugin_router = create_router(repository, file_storage, get_current_user)
        except Exception as e:
            raise RuntimeError(f"Failed to load plugin '{ep.name}': {e}") from e
        master.include_router(plugin_router)
        logger.debug(f"Mounted routes of plugin '{ep.name}'")

    return master


def get_available_plugins() -> list[str]:
    """Names of the route plugins registered as entry points."""
    return [ep.name for ep in entry_points(group=ROUTE_ENTRY_POINT_GROUP)]
