from agents import Agent, OpenAIResponsesModel, RunConfig, Runner
from openai import AsyncOpenAI

from app.receipt.base import EXTRACTION_PROMPT


class OpenAIReceiptExtractor:
    """Receipt extraction using OpenAI Agents SDK with GPT-4o vision."""

    def __init__(self, api_key: str, model: str = "gpt-4o") -> None:
        self._agent = Agent(
            name="Receipt Scanner",
            instructions=EXTRACTION_PROMPT,
            model=OpenAIResponsesModel(
                model=model,
                openai_client=AsyncOpenAI(api_key=api_key),
            ),
        )

    async def extract(self, image_data: str, mime_type: str) -> str:
        result = await Runner.run(
            self._agent,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_image", "image_url": f"data:{mime_type};base64,{image_data}"},
                        {"type": "input_text", "text": "Extract the line items from this receipt as a JSON array."},
                    ],
                }
            ],
            run_config=RunConfig(tracing_disabled=True),
        )

        return str(result.final_output or "")
