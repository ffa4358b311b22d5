"""Client for the scan endpoint.

Posts a data-URL image to ``/api/scan`` and turns the extracted receipt lines
into unit-priced BillItems ready to be assigned to people.
"""

import logging
import math
import uuid
from dataclasses import dataclass, field
from typing import Any

import httpx

from app import messages
from app.logging_config import LOGGER_NAME
from app.schemas import ExtractedLineItem

logger = logging.getLogger(LOGGER_NAME)


class ScanError(Exception):
    """Any failure to get items back from the scan endpoint."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidLineItemError(ValueError):
    pass


@dataclass
class BillItem:
    name: str
    price: float
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    assigned_to: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "assignedTo": list(self.assigned_to),
        }


def _is_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints past the float range
        return False


def decode_line_item(entry: Any) -> ExtractedLineItem:
    """Check one raw entry from the AI reply.

    Raises InvalidLineItemError with the reason when the entry has no name or
    no positive numeric price. A missing or non-positive quantity becomes 1.
    """
    if not isinstance(entry, dict):
        raise InvalidLineItemError(f"not an object: {entry!r}")

    name = entry.get("name")
    if not name:
        raise InvalidLineItemError("missing name")

    price = entry.get("price")
    if not _is_number(price) or price <= 0:
        raise InvalidLineItemError(f"invalid price: {price!r}")

    quantity = entry.get("quantity")
    if not _is_number(quantity) or quantity <= 0:
        quantity = 1

    return ExtractedLineItem(name=str(name), quantity=quantity, price=price)


def expand_line_item(item: ExtractedLineItem) -> list[BillItem]:
    """Split a line of quantity n into n BillItems priced price / n.

    A fractional quantity is floored to a whole count and the line price is
    shared over that count, so the items always add up to the line total.
    """
    count = math.floor(item.quantity)
    if count <= 1:
        return [BillItem(name=item.name, price=item.price)]

    unit_price = item.price / count
    return [
        BillItem(name=f"{item.name} ({k}/{count})", price=unit_price)
        for k in range(1, count + 1)
    ]


def to_bill_items(parsed: Any) -> list[BillItem]:
    """Convert the endpoint's JSON body into BillItems, dropping bad entries."""
    if not isinstance(parsed, list):
        return []

    items: list[BillItem] = []
    for entry in parsed:
        try:
            line_item = decode_line_item(entry)
        except InvalidLineItemError as e:
            logger.debug(f"Dropping receipt entry: {e}")
            continue
        items.extend(expand_line_item(line_item))
    return items


class ScanClient:
    def __init__(
        self,
        base_url: str = "",
        *,
        http_client: httpx.AsyncClient | None = None,
        path: str = "/api/scan",
    ) -> None:
        self._base_url = base_url
        self._http_client = http_client
        self._path = path

    async def _post(self, base64_image: str) -> httpx.Response:
        kwargs = {
            "json": {"base64Image": base64_image},
            "headers": {"Content-Type": "application/json"},
        }
        if self._http_client is not None:
            return await self._http_client.post(self._path, **kwargs)
        async with httpx.AsyncClient(base_url=self._base_url) as client:
            return await client.post(self._path, **kwargs)

    async def extract_items_from_receipt(self, base64_image: str) -> list[BillItem]:
        try:
            response = await self._post(base64_image)
        except httpx.HTTPError as e:
            raise ScanError(messages.connection_failed(e)) from e

        if not response.is_success:
            error_message = messages.server_error(response.status_code)
            try:
                error_data = response.json()
            except ValueError:
                logger.error("Could not parse error JSON from server")
            else:
                if isinstance(error_data, dict) and error_data.get("error"):
                    error_message = error_data["error"]
            raise ScanError(error_message, status_code=response.status_code)

        try:
            parsed = response.json()
        except ValueError as e:
            raise ScanError(messages.server_error(response.status_code)) from e

        return to_bill_items(parsed)
