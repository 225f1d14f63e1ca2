"""State holder for the item edit screen."""
import logging

from inventory.repositories.items_repository import ItemsRepository
from inventory.schemas.item import ItemDetails, ItemUiState
from inventory.ui.state_holder import ViewModel

logger = logging.getLogger(__name__)


class ItemEditViewModel(ViewModel[ItemUiState]):
    """
    Loads the item with ``item_id`` into a draft, validates edits and writes
    them back over the same row.
    """

    def __init__(self, item_id: int, items_repository: ItemsRepository) -> None:
        super().__init__(ItemUiState())
        logger.trace("Initializing ItemEditViewModel item_id=%s", item_id)
        self.item_id = item_id
        self._repo = items_repository
        self._loaded = False
        self.launch(self._load())

    @property
    def item_ui_state(self) -> ItemUiState:
        return self.ui_state

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def _load(self) -> None:
        item = await self._repo.get_item_stream(self.item_id).first(
            lambda value: value is not None
        )
        logger.trace("Edit draft seeded from item id=%s", self.item_id)
        self._loaded = True
        self._set_state(item.to_item_ui_state(is_entry_valid=True))

    async def wait_until_loaded(self, timeout: float = 5.0) -> ItemUiState:
        return await self.wait_for(lambda _: self._loaded, timeout)

    def update_ui_state(self, item_details: ItemDetails) -> None:
        """Replace the draft and recompute its validity."""
        self._set_state(ItemUiState.from_details(item_details))

    async def update_item(self) -> bool:
        """Write the draft over the stored row when valid; returns whether it ran."""
        details = self.item_ui_state.item_details
        if not details.is_valid():
            logger.trace("Edit draft invalid, update skipped id=%s", self.item_id)
            return False
        logger.info("Updating item id=%s", details.id)
        await self._repo.update_item(details.to_item())
        return True
