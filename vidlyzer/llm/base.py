"""
Sentiment classifier abstract base class
"""
from abc import ABC, abstractmethod


class SentimentClassifier(ABC):
    """Free-text sentiment classifier"""

    @abstractmethod
    def classify(self, text: str) -> str:
        """
        Classify the transcript as Positive, Negative or Neutral

        :param text: full transcript text
        :return: the label as returned by the classifier, unvalidated
        :raises SentimentAnalysisError: when the call fails
        """
        ...
