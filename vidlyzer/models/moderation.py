"""
Moderation response data models

Field names are Python identifiers; the aliases are the wire keys used by the
moderation endpoint (several contain a slash or a hyphen).
Source: https://platform.openai.com/docs/guides/moderation/overview
"""
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Python field name -> wire key
CATEGORY_WIRE_NAMES: dict[str, str] = {
    "sexual": "sexual",
    "hate": "hate",
    "harassment": "harassment",
    "self_harm": "self-harm",
    "violence": "violence",
    "illicit": "illicit",
    "harassment_threatening": "harassment/threatening",
    "hate_threatening": "hate/threatening",
    "illicit_violent": "illicit/violent",
    "violence_graphic": "violence/graphic",
    "sexual_minors": "sexual/minors",
    "self_harm_intent": "self-harm/intent",
    "self_harm_instructions": "self-harm/instructions",
}

_FIELD_NAMES = {wire: name for name, wire in CATEGORY_WIRE_NAMES.items()}


class ModerationCategories(BaseModel):
    """One boolean flag per harm category"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sexual: bool
    hate: bool
    harassment: bool
    self_harm: bool = Field(alias="self-harm")
    violence: bool
    illicit: bool = False
    harassment_threatening: bool = Field(alias="harassment/threatening")
    hate_threatening: bool = Field(alias="hate/threatening")
    illicit_violent: bool = Field(default=False, alias="illicit/violent")
    violence_graphic: bool = Field(alias="violence/graphic")
    sexual_minors: bool = Field(alias="sexual/minors")
    self_harm_intent: bool = Field(alias="self-harm/intent")
    self_harm_instructions: bool = Field(alias="self-harm/instructions")

    @field_validator("illicit", "illicit_violent", mode="before")
    @classmethod
    def _null_as_false(cls, value: Any) -> Any:
        # older model versions return null for the illicit categories
        return False if value is None else value

    def is_flagged(self, category: str) -> bool:
        """Look a flag up by its wire key (or field name); unknown categories are not flagged"""
        name = _FIELD_NAMES.get(category, category)
        if name not in CATEGORY_WIRE_NAMES:
            return False
        return bool(getattr(self, name))

    def flagged_categories(self) -> List[str]:
        """Wire keys of every raised flag, in declaration order"""
        return [wire for name, wire in CATEGORY_WIRE_NAMES.items() if getattr(self, name)]


class ModerationCategoryScores(BaseModel):
    """Model confidence per harm category"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sexual: float = 0.0
    hate: float = 0.0
    harassment: float = 0.0
    self_harm: float = Field(default=0.0, alias="self-harm")
    violence: float = 0.0
    illicit: float = 0.0
    harassment_threatening: float = Field(default=0.0, alias="harassment/threatening")
    hate_threatening: float = Field(default=0.0, alias="hate/threatening")
    illicit_violent: float = Field(default=0.0, alias="illicit/violent")
    violence_graphic: float = Field(default=0.0, alias="violence/graphic")
    sexual_minors: float = Field(default=0.0, alias="sexual/minors")
    self_harm_intent: float = Field(default=0.0, alias="self-harm/intent")
    self_harm_instructions: float = Field(default=0.0, alias="self-harm/instructions")

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value


class ModerationResult(BaseModel):
    """Verdict for one moderated input"""
    model_config = ConfigDict(frozen=True)

    flagged: bool
    categories: ModerationCategories
    category_scores: ModerationCategoryScores = Field(default_factory=ModerationCategoryScores)


class ModerationResponse(BaseModel):
    """Full moderation response; one result per input"""
    model_config = ConfigDict(frozen=True)

    results: List[ModerationResult]

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ModerationResponse":
        return cls.model_validate(payload)
