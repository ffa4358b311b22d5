from dataclasses import dataclass
from typing import Protocol

EXTRACTION_PROMPT = """\
Analyze the receipt image. Extract every item, its quantity and its total price.

Rules:
- Ignore taxes, service charges, tips and total/subtotal lines.
- If the quantity is not shown, assume it is 1.
- price is the total price for that line (unit price * quantity) as a number.
- Return the data as a JSON array of objects with the keys "name" (string), "quantity" (number) and "price" (number).
- If the image is not a receipt or cannot be read, return an empty array.
- Your whole answer must be only the JSON array, with no other text and no markdown delimiters.
Example: [{"name": "Hamburguesa", "quantity": 1, "price": 12.50}, {"name": "Patatas Fritas", "quantity": 2, "price": 4.00}]"""


class ReceiptExtractor(Protocol):
    async def extract(self, image_data: str, mime_type: str) -> str:
        """Return the model's raw text reply for a base64 image payload."""
        ...


@dataclass(frozen=True)
class UnconfiguredExtractor:
    """Stands in for an extractor when the provider has no credential."""

    provider: str
    reason: str
