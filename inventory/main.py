"""
Application entry point.

Wires logging and the dependency container; a rendering layer then builds
its screens through ``InventoryApplication.view_models``.
"""
import logging
from typing import Optional

from inventory.container import AppDataContainer, get_container
from inventory.core.config import settings
from inventory.core.logging_config import configure_logging
from inventory.ui.view_model_provider import AppViewModelProvider


class InventoryApplication:
    """Process-level owner of the container."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self._db_path = db_path
        self.container: Optional[AppDataContainer] = None
        self.view_models: Optional[AppViewModelProvider] = None

    def on_create(self, log_file_path: Optional[str] = None) -> "InventoryApplication":
        configure_logging(log_file_path)
        logger = logging.getLogger(__name__)
        logger.info("Starting %s v%s", settings.APP_NAME, settings.APP_VERSION)
        if self._db_path is None:
            self.container = get_container()
        else:
            self.container = AppDataContainer(self._db_path)
        self.view_models = AppViewModelProvider(self.container)
        return self

    def on_terminate(self) -> None:
        if self.container is not None:
            self.container.close()
            self.container = None
            self.view_models = None
