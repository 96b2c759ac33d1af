"""
Moderator over the OpenAI moderation endpoint
"""
import logging
from typing import List

import openai
from pydantic import ValidationError

from vidlyzer.errors import ModerationError
from vidlyzer.models.moderation import ModerationResponse, ModerationResult
from vidlyzer.moderators.base import Moderator
from vidlyzer.openai_client import create_client, to_analysis_error

logger = logging.getLogger(__name__)


class OpenAIModerator(Moderator):

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "omni-moderation-latest",
        timeout: float = 60.0,
    ):
        self.model = model
        self.client = create_client(api_key, base_url, timeout)
        logger.info(f"[Moderator] initialized: model={model}, base_url={base_url}")

    def moderate(self, text: str) -> List[ModerationResult]:
        logger.info(f"[Moderator] start: model={self.model}, text_len={len(text)}")

        try:
            response = self.client.moderations.create(model=self.model, input=text)
        except openai.OpenAIError as e:
            logger.error(f"[Moderator] request failed: {e}")
            raise to_analysis_error(e, ModerationError) from e

        if response is None:
            raise ModerationError("No data received from the server")

        # dump with aliases so category keys keep their wire names ("self-harm", "hate/threatening", ...)
        payload = response if isinstance(response, dict) else response.model_dump(by_alias=True)
        try:
            moderation = ModerationResponse.from_payload(payload)
        except ValidationError as e:
            logger.error(f"[Moderator] decoding error: {e}")
            raise ModerationError("Failed to parse response.") from e

        if not moderation.results:
            raise ModerationError("No data received from the server")

        flagged = sum(1 for r in moderation.results if r.flagged)
        logger.info(f"[Moderator] done: results={len(moderation.results)}, flagged={flagged}")
        return moderation.results
