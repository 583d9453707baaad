from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Needed for cross-member aggregates (leaderboard)
    supabase_page_size: int = 1000  # Must not exceed the PostgREST max-rows setting of the project
    supabase_in_chunk_size: int = 200  # Ids per in_() filter, keeps request URLs short

    # Storage
    gym_logos_bucket: str = "gym-logos"
    max_logo_bytes: int = 2 * 1024 * 1024

    # AI gateway (OpenAI-compatible chat completions)
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    ai_gateway_api_key: Optional[str] = None
    ai_model: str = "google/gemini-2.5-flash"
    ai_request_timeout: int = 30
    ai_rate_limit: str = "30/minute"

    # App
    app_name: str = "fitdash"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173,http://localhost:8080"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
