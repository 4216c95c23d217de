"""
Pydantic schemas for the classifier's static resources.

These validate the training corpus records and the keyword rule tables
as they are read from disk, before any model is built from them.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TrainingExample(BaseModel):
    """One labelled document of the training corpus."""
    model_config = ConfigDict(frozen=True)

    category: str = Field(..., min_length=1, description="Target intent label")
    text: str = Field(..., min_length=1, description="Example message text")

    @field_validator("category", "text")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject values made only of whitespace."""
        if not v.strip():
            raise ValueError("Value cannot be blank")
        return v.strip()


class KeywordRuleTable(BaseModel):
    """Phrase lists and tier confidence for one keyword rule."""
    model_config = ConfigDict(frozen=True)

    category: str = Field(..., min_length=1)
    confidence: float = Field(..., ge=0.0, le=1.0)
    description: str = ""
    phrases: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator("phrases")
    @classmethod
    def normalize_phrases(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Lower-case every phrase; the engine matches on lower-cased text."""
        return {
            name: [phrase.lower().strip() for phrase in phrases if phrase.strip()]
            for name, phrases in v.items()
        }

    def terms(self, name: str) -> List[str]:
        return self.phrases.get(name, [])


class KeywordRuleSet(BaseModel):
    """Versioned, ordered collection of rule tables. Order is precedence."""
    model_config = ConfigDict(frozen=True)

    version: int = Field(..., ge=1)
    rules: List[KeywordRuleTable] = Field(..., min_length=1)

    @field_validator("rules")
    @classmethod
    def validate_unique_categories(cls, v: List[KeywordRuleTable]) -> List[KeywordRuleTable]:
        categories = [table.category for table in v]
        if len(categories) != len(set(categories)):
            raise ValueError("Each category may appear in only one rule table")
        return v

    def categories(self) -> List[str]:
        return [table.category for table in self.rules]
