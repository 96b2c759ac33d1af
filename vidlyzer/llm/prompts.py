"""
Prompt templates for sentiment classification
"""

# ==================== System prompt ====================

SYSTEM_PROMPT = "You are a helpful assistant for sentiment analysis."


# ==================== User prompt template ====================

USER_PROMPT_TEMPLATE = (
    "Analyze the sentiment of the following text and categorize it as "
    "Positive, Negative, or Neutral. Answer with a single word.\n\n"
    "Text:\n"
    "\"{text}\""
)


def build_user_prompt(text: str) -> str:
    """
    Assemble the user prompt

    :param text: transcript text
    :return: full user prompt
    """
    return USER_PROMPT_TEMPLATE.format(text=text)
