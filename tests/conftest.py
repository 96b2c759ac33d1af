"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest

from vidlyzer.llm.base import SentimentClassifier
from vidlyzer.models.moderation import CATEGORY_WIRE_NAMES, ModerationResult
from vidlyzer.models.transcript import TranscriptionResult


def categories_payload(**flags: bool) -> dict:
    """All 13 wire categories set to False, overridden by field-name flags."""
    payload = {wire: False for wire in CATEGORY_WIRE_NAMES.values()}
    for name, value in flags.items():
        payload[CATEGORY_WIRE_NAMES[name]] = value
    return payload


def moderation_payload(flagged: bool, **flags: bool) -> dict:
    return {
        "flagged": flagged,
        "categories": categories_payload(**flags),
        "category_scores": {wire: 0.01 for wire in CATEGORY_WIRE_NAMES.values()},
    }


def make_moderation(flagged: bool, **flags: bool) -> ModerationResult:
    return ModerationResult.model_validate(moderation_payload(flagged, **flags))


@pytest.fixture
def transcription_payload() -> dict:
    return {
        "task": "transcribe",
        "text": "You are an idiot. I will wait here.",
        "language": "english",
        "duration": 12.0,
        "words": [
            {"word": "You", "start": 0.0, "end": 0.3},
            {"word": "are", "start": 0.3, "end": 0.5},
            {"word": "an", "start": 0.5, "end": 0.6},
            {"word": "idiot", "start": 0.6, "end": 1.0},
            {"word": "I", "start": 3.5, "end": 3.6},
            {"word": "will", "start": 3.6, "end": 3.9},
            {"word": "wait", "start": 3.9, "end": 4.2},
            {"word": "here", "start": 7.0, "end": 7.4},
        ],
    }


@pytest.fixture
def transcript(transcription_payload) -> TranscriptionResult:
    return TranscriptionResult.from_payload(transcription_payload)


@pytest.fixture
def classifier() -> MagicMock:
    mock = MagicMock(spec=SentimentClassifier)
    mock.classify.return_value = "Negative"
    return mock


@pytest.fixture
def moderation_factory():
    return make_moderation


@pytest.fixture
def moderation_payload_factory():
    return moderation_payload
