"""
VidLyzer - video content analysis backend

Run:
    python main.py
    or
    uvicorn main:app --host 0.0.0.0 --port 8900 --reload
"""
import logging

import uvicorn

from vidlyzer import create_app
from vidlyzer.config import settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-7s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("vidlyzer")

app = create_app()

if __name__ == "__main__":
    logger.info(f"🚀 VidLyzer starting on http://{settings.host}:{settings.port}")
    logger.info(f"📖 API docs: http://127.0.0.1:{settings.port}/docs")
    logger.info(f"🎙️ Transcription: {settings.transcription_model} @ {settings.openai_base_url}")
    logger.info(f"🛡️ Moderation: {settings.moderation_model}, sentiment: {settings.sentiment_model}")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        reload=False,
    )
