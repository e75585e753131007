"""Price level data model."""

from pydantic import BaseModel, ConfigDict, Field


class PriceLevel(BaseModel):
    """Named price level defined in the SalesPad database."""

    name: str = Field(..., min_length=1)
    description: str = ""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
