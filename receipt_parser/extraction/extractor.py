"""AI-powered receipt extractor: image -> text -> ExtractedRecord."""

import base64
import json
from pathlib import Path

from receipt_parser.extraction.base import BaseExtractor
from receipt_parser.extraction.client_base import BaseExtractionClient
from receipt_parser.extraction.exceptions import (
    ExtractionError,
    ModelServiceError,
    StructuringError,
)
from receipt_parser.extraction.models import ExtractedRecord
from receipt_parser.extraction.prompt_loader import load_json_schema, load_prompt_template
from receipt_parser.extraction.validator import validate_and_build
from receipt_parser.logging.logger import Log

EMPTY_TEXT_MESSAGE = "Could not extract any text. The image might be unclear."


class ReceiptExtractor(BaseExtractor):
    """Extracts receipt data with two calls to a vision-capable AI provider."""

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.0,
        ocr_prompt_path: Path | None = None,
        structuring_prompt_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "You convert receipt text into structured JSON.",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = system_prompt
        self._ocr_prompt = load_prompt_template("ocr_prompt.txt", ocr_prompt_path)
        self._structuring_prompt = load_prompt_template(
            "structuring_prompt.txt", structuring_prompt_path
        )
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

    def extract_text(self, image: bytes, mime_type: str) -> str:
        """Transcribe the receipt image; empty output is an error."""
        if not image:
            raise ExtractionError("Image payload is empty")
        try:
            raw = self._client.create_vision_completion(
                model=self._model,
                temperature=self._temperature,
                prompt=self._ocr_prompt,
                image_data_url=_to_data_url(image, mime_type),
            )
        except ModelServiceError as exc:
            raise ExtractionError(f"Text extraction failed: {exc}") from exc

        text = raw.strip()
        Log.debug(f"OCR raw response:\n{text}")
        if not text:
            raise ExtractionError(EMPTY_TEXT_MESSAGE)
        Log.info(f"Extracted {len(text)} chars of receipt text")
        return text

    def structure(self, text: str) -> ExtractedRecord:
        """Convert receipt text into a schema-checked ExtractedRecord."""
        prompt = self._structuring_prompt.format(
            receipt_text=text,
            json_schema=self._json_schema,
        )
        Log.debug(f"Structuring prompt:\n{prompt}")
        try:
            raw_response = self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=prompt,
                json_schema=self._json_schema_dict,
            )
        except ModelServiceError as exc:
            raise StructuringError(f"Structuring failed: {exc}") from exc
        Log.debug(f"AI raw response:\n{raw_response}")

        record = validate_and_build(self._parse_json(raw_response))
        Log.info(
            f"Structured receipt from {record.merchant!r}: "
            f"total={record.total}, {len(record.line_items)} line items"
        )
        return record

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise StructuringError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise StructuringError("JSON response must be an object")
        return parsed


def _to_data_url(image: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(image).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
