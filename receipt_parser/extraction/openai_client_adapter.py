from typing import Any

import httpx
import openai

from receipt_parser.extraction.client_base import BaseExtractionClient
from receipt_parser.extraction.exceptions import ModelServiceError


class OpenAIClientAdapter(BaseExtractionClient):
    """Extraction AI client adapter built on the OpenAI-compatible chat API.

    Gemini, OpenRouter, Groq, Together and Ollama all expose this API, so one
    adapter covers every configured provider.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_vision_completion(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        image_data_url: str,
    ) -> str:
        return self._complete(
            model=model,
            temperature=temperature,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": image_data_url}},
                    ],
                },
            ],
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        return self._complete(
            model=model,
            temperature=temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "expense_data",
                    "strict": True,
                    "schema": json_schema,
                },
            },
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )

    def _complete(self, **request: Any) -> str:
        try:
            response = self._client.chat.completions.create(**request)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ModelServiceError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ModelServiceError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ModelServiceError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ModelServiceError("AI returned empty response")
        return content
