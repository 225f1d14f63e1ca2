"""State holder for the item details screen."""
import logging

from inventory.repositories.items_repository import ItemsRepository
from inventory.schemas.item import ItemDetailsUiState
from inventory.ui.state_holder import ViewModel

logger = logging.getLogger(__name__)


class ItemDetailsViewModel(ViewModel[ItemDetailsUiState]):
    """Shows one item and offers the sell and delete actions."""

    def __init__(self, item_id: int, items_repository: ItemsRepository) -> None:
        super().__init__(ItemDetailsUiState())
        logger.trace("Initializing ItemDetailsViewModel item_id=%s", item_id)
        self.item_id = item_id
        self._repo = items_repository
        self.launch(self._collect_item())

    async def _collect_item(self) -> None:
        async for item in self._repo.get_item_stream(self.item_id):
            # Absent emissions keep the last known item on screen
            if item is None:
                continue
            self._set_state(ItemDetailsUiState.from_item(item))

    async def reduce_quantity_by_one(self) -> None:
        """Sell one unit. Nothing is written once the item is out of stock."""
        current = self.ui_state.item_details.to_item()
        if current.quantity <= 0:
            logger.trace("Item id=%s out of stock, sell skipped", current.id)
            return
        logger.info("Selling one unit of item id=%s", current.id)
        await self._repo.update_item(current.copy(quantity=current.quantity - 1))

    async def delete_item(self) -> None:
        """Remove the item; the caller navigates away afterwards."""
        logger.info("Deleting item id=%s", self.item_id)
        item = self.ui_state.item_details.to_item().copy(id=self.item_id)
        await self._repo.delete_item(item)
