"""Sales line item record model."""

from typing import ClassVar

from ..config import SALES_LINE_ITEM_PATH
from .entity import Entity, EntityType


class SalesLineItem(Entity):
    """Line entry of a sales document, identified by ``Line_Num``."""

    entity_type: ClassVar[EntityType] = EntityType(
        name="SalesLineItem", endpoint=SALES_LINE_ITEM_PATH, id_key="Line_Num"
    )
