import base64

from google import genai
from google.genai import types

from app.receipt.base import EXTRACTION_PROMPT


class GeminiReceiptExtractor:
    """Receipt extraction using the Gemini API with JSON output."""

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash") -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model

    async def extract(self, image_data: str, mime_type: str) -> str:
        image_part = types.Part.from_bytes(
            data=base64.b64decode(image_data),
            mime_type=mime_type,
        )

        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=[image_part, EXTRACTION_PROMPT],
            config=types.GenerateContentConfig(response_mime_type="application/json"),
        )

        return response.text or ""
