"""Inventory item record model."""

from typing import ClassVar

from ..config import ITEM_MASTER_PATH
from .entity import Entity, EntityType


class Item(Entity):
    """Inventory item, identified by ``Item_Number``.

    Items built from InventorySearch carry an extra ``Locations`` property:
    one dict per warehouse location holding the fields that vary by location
    (quantities, bins, etc.).
    """

    entity_type: ClassVar[EntityType] = EntityType(
        name="Item", endpoint=ITEM_MASTER_PATH, id_key="Item_Number"
    )
