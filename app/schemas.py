from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ScanIn(BaseModel):
    # Validated by parse_data_url so a wrong type gets the invalid-format message
    base64_image: Any = Field(default=None, alias="base64Image")

    model_config = ConfigDict(populate_by_name=True)


class ExtractedLineItem(BaseModel):
    name: str
    quantity: float = 1
    price: float
