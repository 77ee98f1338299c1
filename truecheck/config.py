from pydantic_settings import BaseSettings
from typing import List, Optional
import os

class Settings(BaseSettings):
    ALLOWED_ORIGINS: str = "http://localhost:3000"
    MODEL_API_BASE: str = "https://generativelanguage.googleapis.com"
    MODEL_NAME: str = "gemini-2.5-flash"

    # Programmable Search; leaving either unset puts the search leg in mock mode
    GOOGLE_SEARCH_API_KEY: Optional[str] = None
    GOOGLE_SEARCH_ENGINE_ID: Optional[str] = None

    REQUEST_TIMEOUT: float = 20.0  # seconds, per outbound call
    LOG_LEVEL: str = "INFO"

    @property
    def origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def search_enabled(self) -> bool:
        return bool(self.GOOGLE_SEARCH_API_KEY and self.GOOGLE_SEARCH_ENGINE_ID)

    @property
    def model_url(self) -> str:
        return f"{self.MODEL_API_BASE.rstrip('/')}/v1beta/models/{self.MODEL_NAME}:generateContent"

settings = Settings(_env_file=os.getenv("ENV_FILE", ".env"), _env_file_encoding="utf-8")
