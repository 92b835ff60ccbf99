from abc import ABC, abstractmethod


class BaseExtractionClient(ABC):
    """Contract for provider-specific extraction AI clients."""

    @abstractmethod
    def create_vision_completion(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        image_data_url: str,
    ) -> str:
        """Send an instruction plus one image and return the response text.

        Raises:
            ModelServiceError: on transport/API failure or an empty response.
        """

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        """Return a schema-constrained response as plain text.

        Raises:
            ModelServiceError: on transport/API failure or an empty response.
        """
