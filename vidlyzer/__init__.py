"""
VidLyzer - video content analysis backend
"""
from fastapi import FastAPI


def create_app() -> FastAPI:
    from vidlyzer.routers import analysis

    app = FastAPI(
        title="VidLyzer",
        description="Video content analysis API: upload a clip, get timestamped offensive words, pauses and sentiment",
        version="0.1.0",
    )
    app.include_router(analysis.router, prefix="/api")
    return app
