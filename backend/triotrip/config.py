from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # AI planner
    ai_enabled: bool = False
    openai_api_key: str = ""
    openai_model: str = "gpt-4.1-mini"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    ai_system_message: str = (
        "You are an expert travel planning assistant. Always output valid JSON when asked."
    )

    # Amadeus (flight offers)
    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_env: str = "test"
    amadeus_token_margin_seconds: int = 30
    amadeus_max_offers: int = 20

    # Duffel (offers + orders)
    duffel_access_token: str = ""
    duffel_base_url: str = "https://api.duffel.com"
    duffel_version: str = "v2"

    http_timeout_seconds: float = 30.0

    # CORS
    cors_origins: str = "http://localhost:3000"

    @property
    def amadeus_base_url(self) -> str:
        if self.amadeus_env == "production":
            return "https://api.amadeus.com"
        return "https://test.api.amadeus.com"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
