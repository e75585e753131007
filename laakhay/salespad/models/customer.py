"""Customer record model."""

from typing import ClassVar

from ..config import CUSTOMER_PATH
from .entity import Entity, EntityType


class Customer(Entity):
    """Customer in a SalesPad database, identified by ``Customer_Num``."""

    entity_type: ClassVar[EntityType] = EntityType(
        name="Customer", endpoint=CUSTOMER_PATH, id_key="Customer_Num"
    )
