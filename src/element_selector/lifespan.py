"""Application lifespan management (startup/shutdown hooks)."""

from __future__ import annotations

from contextlib import asynccontextmanager

from .config.settings import get_settings
from .observability.logger import configure_logging, get_logger
from .services.element_filter import ElementSelectorFilter
from .services.indexer import SelectorFieldIndexer

logger = get_logger(__name__)

app_state: dict = {}


def build_components() -> dict:
    """Build the shared, read-only filter components from settings.

    Raises:
        InvalidSelectorError: if a configured selector does not parse.
    """
    settings = get_settings()
    element_filter = ElementSelectorFilter.from_settings(settings)
    return {
        "element_filter": element_filter,
        "indexer": SelectorFieldIndexer(element_filter.storage_field),
    }


@asynccontextmanager
async def lifespan_manager():
    """Manage application lifespan (startup and shutdown)."""
    settings = get_settings()

    configure_logging(settings)
    logger.info("starting_application", service_name=settings.service_name)

    app_state.update(build_components())
    element_filter: ElementSelectorFilter = app_state["element_filter"]
    logger.info(
        "element_filter_ready",
        mode=element_filter.select_mode("").value,
        blacklist_size=len(element_filter.blacklist),
        whitelist_size=len(element_filter.whitelist),
    )

    try:
        yield
    finally:
        app_state.clear()
        logger.info("application_stopped")
