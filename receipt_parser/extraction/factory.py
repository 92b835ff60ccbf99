from dataclasses import dataclass

from receipt_parser.config.settings import Settings
from receipt_parser.extraction.base import BaseExtractor
from receipt_parser.extraction.example_client_adapter import ExampleClientAdapter
from receipt_parser.extraction.extractor import ReceiptExtractor
from receipt_parser.extraction.openai_client_adapter import OpenAIClientAdapter

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


@dataclass(frozen=True)
class ProviderProfile:
    """Endpoint and model defaults for one vision provider."""

    base_url: str | None
    default_model: str
    requires_base_url: bool = False


PROVIDERS: dict[str, ProviderProfile] = {
    "gemini": ProviderProfile(base_url=GEMINI_BASE_URL, default_model="gemini-2.5-flash"),
    "openai": ProviderProfile(base_url=None, default_model="gpt-4o-mini"),
    "openai_compatible": ProviderProfile(base_url=None, default_model="", requires_base_url=True),
}


class ExtractorFactory:
    """Creates the configured receipt extractor.

    ``example`` runs offline. Every other provider is reached through the
    OpenAI SDK; ``extraction_base_url`` and ``extraction_model_name`` override
    the provider's defaults when set.
    """

    @classmethod
    def create(cls, settings: Settings) -> BaseExtractor:
        provider = settings.extraction_provider.strip().lower()
        if provider == "example":
            return ReceiptExtractor(client=ExampleClientAdapter(), model="example")

        profile = PROVIDERS.get(provider)
        if profile is None:
            supported = ["example", *PROVIDERS]
            raise ValueError(
                f"Unknown extraction provider '{provider}'. Choose from: {supported}"
            )

        base_url = settings.extraction_base_url.strip() or profile.base_url
        if profile.requires_base_url and not base_url:
            raise ValueError(
                f"extraction_base_url is required for extraction_provider={provider}"
            )
        model = settings.extraction_model_name.strip() or profile.default_model
        if not model:
            raise ValueError(
                f"extraction_model_name is required for extraction_provider={provider}"
            )

        client = OpenAIClientAdapter(
            api_key=settings.extraction_api_key,
            timeout_seconds=settings.extraction_timeout_seconds,
            base_url=base_url,
        )
        return ReceiptExtractor(
            client=client,
            model=model,
            temperature=settings.extraction_temperature,
        )
