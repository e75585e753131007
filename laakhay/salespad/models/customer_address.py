"""Customer address record model."""

from typing import ClassVar

from ..config import CUSTOMER_ADDRESS_PATH
from .entity import Entity, EntityType


class CustomerAddress(Entity):
    """Address attached to a customer, identified by ``Address_Code``."""

    entity_type: ClassVar[EntityType] = EntityType(
        name="CustomerAddress", endpoint=CUSTOMER_ADDRESS_PATH, id_key="Address_Code"
    )
