from pydantic_settings import BaseSettings
import os

class Settings(BaseSettings):
    db_dsn: str = os.getenv("DB_DSN", "sqlite:///./data/darkhorse.db")
    history_cap: int = int(os.getenv("HISTORY_CAP", 300))
    generation_delay: float = float(os.getenv("GENERATION_DELAY", 4.5))
    api_key: str | None = os.getenv("API_KEY")
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY")
    chat_model: str = os.getenv("CHAT_MODEL", "gemini-3-flash-preview")
    chat_base_url: str = os.getenv("CHAT_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
    chat_timeout: float = float(os.getenv("CHAT_TIMEOUT", 30))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

settings = Settings()
