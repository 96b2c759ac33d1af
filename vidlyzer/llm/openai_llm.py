"""
Sentiment classifier over an OpenAI compatible chat completion API
Works with OpenAI / DeepSeek / Ollama and other compatible endpoints
"""
import logging

import openai

from vidlyzer.errors import SentimentAnalysisError
from vidlyzer.llm.base import SentimentClassifier
from vidlyzer.llm.prompts import SYSTEM_PROMPT, build_user_prompt
from vidlyzer.openai_client import create_client, to_analysis_error

logger = logging.getLogger(__name__)

DEFAULT_LABEL = "Neutral"


class OpenAISentimentClassifier(SentimentClassifier):
    """
    Single-word sentiment label from a chat completion

    Sampling is deterministic (temperature 0) and the answer is capped at a few tokens.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-3.5-turbo",
        timeout: float = 60.0,
        max_tokens: int = 10,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.client = create_client(api_key, base_url, timeout)
        logger.info(f"[Sentiment] initialized: model={model}, base_url={base_url}")

    def classify(self, text: str) -> str:
        """
        Ask the model for a Positive / Negative / Neutral label

        :param text: transcript text
        :return: the first choice's content, stripped; "Neutral" when the model returns nothing
        """
        logger.info(f"[Sentiment] classifying: model={self.model}, text_len={len(text)}")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_prompt(text)},
                ],
                max_tokens=self.max_tokens,
                temperature=0,
            )
        except openai.OpenAIError as e:
            logger.error(f"[Sentiment] request failed: {e}")
            raise to_analysis_error(e, SentimentAnalysisError) from e

        choices = getattr(response, "choices", None)
        if not choices:
            logger.warning("[Sentiment] no choices returned, defaulting to Neutral")
            return DEFAULT_LABEL

        content = choices[0].message.content
        label = content.strip() if content else ""
        if not label:
            return DEFAULT_LABEL

        logger.info(f"[Sentiment] label={label}")
        return label
