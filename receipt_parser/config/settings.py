from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    extraction_provider: str = "gemini"
    extraction_api_key: str = ""
    extraction_model_name: str = ""
    extraction_base_url: str = ""
    extraction_timeout_seconds: int = 30
    extraction_temperature: float = 0.0

    persistence_backend: str = "notion"

    notion_api_key: str = ""
    notion_database_id: str = ""
    notion_api_base_url: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"
    notion_timeout_seconds: int = 30

    notion_title_property: str = "Name"
    notion_merchant_property: str = "Merchant"
    notion_date_property: str = "Date"
    notion_total_property: str = "Total"
    notion_items_property: str = "Items"
