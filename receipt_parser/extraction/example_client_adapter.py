"""Example extraction client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseExtractionClient and register the provider in ExtractorFactory.
"""

import json
from typing import ClassVar

from receipt_parser.extraction.client_base import BaseExtractionClient


class ExampleClientAdapter(BaseExtractionClient):
    """Example adapter that returns a fixed transcription and expense JSON.

    No network calls. Useful for local development, dry runs and tests.
    """

    DEFAULT_TRANSCRIPTION: ClassVar[str] = (
        "CORNER GROCERY\n"
        "2024-03-15\n"
        "2 x Milk 1.25\n"
        "1 x Bread 2.50\n"
        "TOTAL 5.00"
    )

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "merchant": "Corner Grocery",
        "date": "2024-03-15",
        "total": 5.0,
        "items": [
            {"item": "Milk", "quantity": 2, "price": 1.25},
            {"item": "Bread", "quantity": 1, "price": 2.5},
        ],
    }

    def create_vision_completion(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        image_data_url: str,
    ) -> str:
        _ = model, temperature, prompt, image_data_url
        return self.DEFAULT_TRANSCRIPTION

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
