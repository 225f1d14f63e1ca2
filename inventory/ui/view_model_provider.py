"""
Factory for per-screen view models.
Every view model receives its repository from the application container.
"""
import logging

from inventory.container import AppContainer
from inventory.ui.home import HomeViewModel
from inventory.ui.item_details import ItemDetailsViewModel
from inventory.ui.item_edit import ItemEditViewModel
from inventory.ui.item_entry import ItemEntryViewModel
from inventory.ui.navigation import (
    HomeDestination,
    ItemDetailsDestination,
    ItemEditDestination,
    ItemEntryDestination,
    resolve_route,
)
from inventory.ui.state_holder import ViewModel

logger = logging.getLogger(__name__)


class AppViewModelProvider:
    def __init__(self, container: AppContainer) -> None:
        self._container = container

    def home(self) -> HomeViewModel:
        return HomeViewModel(self._container.items_repository)

    def item_entry(self) -> ItemEntryViewModel:
        return ItemEntryViewModel(self._container.items_repository)

    def item_details(self, item_id: int) -> ItemDetailsViewModel:
        return ItemDetailsViewModel(item_id, self._container.items_repository)

    def item_edit(self, item_id: int) -> ItemEditViewModel:
        return ItemEditViewModel(item_id, self._container.items_repository)

    def for_route(self, route: str) -> ViewModel:
        """Build the view model for a concrete route like ``item_edit/3``."""
        destination, item_id = resolve_route(route)
        logger.trace("Creating view model for route=%s", route)
        if destination == HomeDestination:
            return self.home()
        if destination == ItemEntryDestination:
            return self.item_entry()
        if destination == ItemDetailsDestination:
            return self.item_details(item_id)
        if destination == ItemEditDestination:
            return self.item_edit(item_id)
        raise ValueError(f"No view model for route {route!r}")
