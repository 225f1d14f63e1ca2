"""State holder for the home screen (the item list)."""
import logging

from inventory.repositories.items_repository import ItemsRepository
from inventory.schemas.item import HomeUiState
from inventory.ui.state_holder import ViewModel

logger = logging.getLogger(__name__)


class HomeViewModel(ViewModel[HomeUiState]):
    """Keeps ``home_ui_state`` equal to the latest emission of all items."""

    def __init__(self, items_repository: ItemsRepository) -> None:
        super().__init__(HomeUiState())
        logger.trace("Initializing HomeViewModel")
        self._repo = items_repository
        self.launch(self._collect_items())

    @property
    def home_ui_state(self) -> HomeUiState:
        return self.ui_state

    async def _collect_items(self) -> None:
        async for items in self._repo.get_all_items_stream():
            logger.trace("Home received %s items", len(items))
            self._set_state(HomeUiState(item_list=items))
