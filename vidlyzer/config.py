"""
VidLyzer configuration
Loads every option from the environment / .env file and exposes the global `settings` singleton
"""
import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent


@dataclass
class Settings:
    """Global configuration, resolved once at process start."""

    # Service
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8900"))

    # OpenAI compatible endpoint (transcription / moderation / chat)
    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "60"))

    transcription_model: str = os.getenv("TRANSCRIPTION_MODEL", "whisper-1")
    moderation_model: str = os.getenv("MODERATION_MODEL", "omni-moderation-latest")
    sentiment_model: str = os.getenv("SENTIMENT_MODEL", "gpt-3.5-turbo")

    # Analysis thresholds (seconds)
    pause_threshold: float = float(os.getenv("PAUSE_THRESHOLD", "2.0"))
    summary_pause_threshold: float = float(os.getenv("SUMMARY_PAUSE_THRESHOLD", "1.0"))

    # Upload limit
    max_upload_mb: float = float(os.getenv("MAX_UPLOAD_MB", "25"))

    # Storage paths
    data_dir: Path = BASE_DIR / os.getenv("DATA_DIR", "data")
    output_dir: Path = BASE_DIR / os.getenv("OUTPUT_DIR", "output")

    def __post_init__(self):
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)


settings = Settings()
