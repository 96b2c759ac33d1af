"""
Moderator abstract base class
"""
from abc import ABC, abstractmethod
from typing import List

from vidlyzer.models.moderation import ModerationResult


class Moderator(ABC):
    """Text content moderator"""

    @abstractmethod
    def moderate(self, text: str) -> List[ModerationResult]:
        """
        Classify text against the harm categories

        :param text: transcript text
        :return: one result per moderated input, never empty
        :raises ModerationError: when the call fails
        """
        ...
