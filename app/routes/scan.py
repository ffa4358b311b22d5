import logging

from fastapi import APIRouter, Depends, Request

from app import messages
from app.errors import ScanFailure
from app.logging_config import LOGGER_NAME
from app.receipt.base import ReceiptExtractor, UnconfiguredExtractor
from app.receipt.parsing import (
    InvalidImageFormatError,
    MissingImageError,
    clean_and_parse,
    parse_data_url,
)
from app.schemas import ScanIn

logger = logging.getLogger(LOGGER_NAME)
router = APIRouter()


def get_extractor(request: Request) -> ReceiptExtractor:
    extractor = request.app.state.extractor
    if isinstance(extractor, UnconfiguredExtractor):
        raise ScanFailure(500, messages.CREDENTIAL_MISSING)
    return extractor


async def _read_scan_body(request: Request) -> ScanIn:
    try:
        body = await request.json()
    except ValueError:
        return ScanIn()
    if not isinstance(body, dict):
        return ScanIn()
    return ScanIn.model_validate(body)


@router.post("/scan")
async def scan_receipt(
    request: Request,
    extractor: ReceiptExtractor = Depends(get_extractor),
):
    data = await _read_scan_body(request)

    try:
        image = parse_data_url(data.base64_image)
    except MissingImageError:
        raise ScanFailure(400, messages.MISSING_IMAGE)
    except InvalidImageFormatError:
        raise ScanFailure(400, messages.INVALID_IMAGE_FORMAT)

    try:
        raw_text = await extractor.extract(image.data, image.mime_type)
        items = clean_and_parse(raw_text)
    except Exception as e:
        logger.error(f"Error in /api/scan: {e}", exc_info=True)
        raise ScanFailure(500, messages.SCAN_FAILED, details=str(e) or type(e).__name__)

    logger.info(
        "Receipt scanned",
        extra={"extra_data": {
            "mime_type": image.mime_type,
            "items_count": len(items) if isinstance(items, list) else None,
        }},
    )

    return items
