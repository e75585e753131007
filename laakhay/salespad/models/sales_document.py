"""Sales document (quote/order/invoice) record model."""

from typing import ClassVar

from ..config import SALES_DOCUMENT_PATH
from .entity import Entity, EntityType


class SalesDocument(Entity):
    """Sales document, identified by ``Sales_Doc_Num``."""

    entity_type: ClassVar[EntityType] = EntityType(
        name="SalesDocument", endpoint=SALES_DOCUMENT_PATH, id_key="Sales_Doc_Num"
    )
