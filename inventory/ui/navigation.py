"""
Screen destinations.

The item id is the only argument passed between screens; it travels as the
last path segment of a route, e.g. ``item_details/3``.
"""
from dataclasses import dataclass
from typing import Optional

ITEM_ID_ARG = "itemId"


@dataclass(frozen=True)
class NavigationDestination:
    route: str
    title: str
    takes_item_id: bool = False

    @property
    def route_with_args(self) -> str:
        if not self.takes_item_id:
            return self.route
        return f"{self.route}/{{{ITEM_ID_ARG}}}"


HomeDestination = NavigationDestination(route="home", title="Inventory")
ItemEntryDestination = NavigationDestination(route="item_entry", title="Add Item")
ItemDetailsDestination = NavigationDestination(
    route="item_details", title="Item Details", takes_item_id=True
)
ItemEditDestination = NavigationDestination(
    route="item_edit", title="Edit Item", takes_item_id=True
)

ALL_DESTINATIONS = (
    HomeDestination,
    ItemEntryDestination,
    ItemDetailsDestination,
    ItemEditDestination,
)


def route_for(destination: NavigationDestination, item_id: Optional[int] = None) -> str:
    """Build the concrete route for ``destination``."""
    if destination.takes_item_id:
        if item_id is None:
            raise ValueError(f"{destination.route} requires an item id")
        return f"{destination.route}/{int(item_id)}"
    return destination.route


def resolve_route(route: str) -> tuple[NavigationDestination, Optional[int]]:
    """Split a concrete route into its destination and item id."""
    base, _, arg = route.strip("/").partition("/")
    for destination in ALL_DESTINATIONS:
        if destination.route != base:
            continue
        if destination.takes_item_id:
            return destination, parse_item_id(route)
        if arg:
            raise ValueError(f"Route {route!r} takes no arguments")
        return destination, None
    raise ValueError(f"Unknown route {route!r}")


def parse_item_id(route: str) -> int:
    """Extract the item id from a route such as ``item_edit/7``."""
    _, _, arg = route.strip("/").partition("/")
    try:
        return int(arg)
    except ValueError:
        raise ValueError(f"Route {route!r} has no valid item id") from None
