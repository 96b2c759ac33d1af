"""
Shared OpenAI client construction and error mapping
"""
from typing import Type

import httpx
import openai
from openai import OpenAI

from vidlyzer.errors import AnalysisError


CONNECT_TIMEOUT = 10.0
RETRYABLE_STATUS_CODES = (408, 409, 429)


def create_client(api_key: str, base_url: str, timeout: float) -> OpenAI:
    """
    Build a client bounded by a per-call timeout

    Automatic retries are disabled: a failed stage is reported to the caller as-is.
    """
    if not api_key:
        raise ValueError("OPENAI_API_KEY is not configured, set it in .env")
    return OpenAI(
        api_key=api_key,
        base_url=base_url,
        timeout=httpx.Timeout(timeout, connect=min(CONNECT_TIMEOUT, timeout)),
        max_retries=0,
    )


def to_analysis_error(exc: openai.OpenAIError, error_cls: Type[AnalysisError]) -> AnalysisError:
    """Translate an SDK exception into the stage error `error_cls`"""
    if isinstance(exc, openai.APITimeoutError):
        return error_cls("Request timed out", retryable=True)
    if isinstance(exc, openai.APIConnectionError):
        return error_cls(f"Connection failed: {exc}", retryable=True)
    if isinstance(exc, openai.APIStatusError):
        status = exc.status_code
        retryable = status in RETRYABLE_STATUS_CODES or status >= 500
        return error_cls(f"HTTP {status}: {exc.message}", retryable=retryable)
    return error_cls(str(exc))
