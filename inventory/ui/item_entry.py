"""State holder for the item entry screen."""
import logging
from typing import Optional

from inventory.repositories.items_repository import ItemsRepository
from inventory.schemas.item import ItemDetails, ItemUiState
from inventory.ui.state_holder import ViewModel

logger = logging.getLogger(__name__)


class ItemEntryViewModel(ViewModel[ItemUiState]):
    """Validates a draft and inserts it as a new Item."""

    def __init__(self, items_repository: ItemsRepository) -> None:
        super().__init__(ItemUiState())
        logger.trace("Initializing ItemEntryViewModel")
        self._repo = items_repository

    @property
    def item_ui_state(self) -> ItemUiState:
        return self.ui_state

    def update_ui_state(self, item_details: ItemDetails) -> None:
        """Replace the draft and recompute its validity."""
        self._set_state(ItemUiState.from_details(item_details))

    async def save_item(self) -> Optional[int]:
        """
        Insert the draft when it is valid and return the new id.
        An invalid draft is a no-op; the screen disables saving instead.
        """
        details = self.item_ui_state.item_details
        if not details.is_valid():
            logger.trace("Entry draft invalid, save skipped")
            return None
        logger.info("Saving new item %s", details.name)
        return await self._repo.insert_item(details.to_item())
