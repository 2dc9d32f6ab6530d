"""Schemas for the AI service responses.

Both endpoints answer with loosely shaped JSON; these models are the
boundary where that JSON is checked before the pipeline touches it.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError as PydanticValidationError,
    field_validator,
)

from ..errors import ParseError
from .document import ProjectEntry, SkillGroup, WorkExperience

Importance = Literal["high", "medium", "low"]


class _ResponseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ExtractedSkill(_ResponseModel):
    """A skill or requirement extracted from a job description."""
    name: str = Field(
        validation_alias=AliasChoices("name", "skill"),
        description="Skill name as written in the job description"
    )
    required: bool = False
    importance: Importance = "medium"
    category: str = ""

    @field_validator("importance", mode="before")
    @classmethod
    def _normalize_importance(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _category_or_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class SkillMatch(ExtractedSkill):
    """An extracted skill paired with whether the candidate already has it."""
    present: bool = False


class MatchAnalysis(_ResponseModel):
    total_skills: int = Field(default=0, alias="totalSkills")
    matching_skills: int = Field(default=0, alias="matchingSkills")
    missing_critical: List[str] = Field(default_factory=list, alias="missingCritical")
    strengths: List[str] = Field(default_factory=list)


class JobAnalysisResult(_ResponseModel):
    """Structured requirement model of one job description."""
    extracted_skills: List[ExtractedSkill] = Field(
        alias="extractedSkills",
        description="Skills and technologies the posting asks for"
    )
    experience_level: str = Field(
        default="",
        alias="experienceLevel",
        description="Seniority hint, e.g. 'junior', 'mid', 'senior'"
    )
    key_requirements: List[str] = Field(default_factory=list, alias="keyRequirements")
    match_analysis: MatchAnalysis = Field(
        default_factory=MatchAnalysis,
        alias="matchAnalysis"
    )

    @field_validator("experience_level", mode="before")
    @classmethod
    def _level_or_blank(cls, value: Any) -> Any:
        return "" if value is None else value


# Wire name -> (attribute, validator) for the generated-content fields.
_GENERATED_FIELDS: Dict[str, tuple] = {
    "summary": ("summary", TypeAdapter(Optional[str])),
    "skillSections": ("skill_sections", TypeAdapter(Optional[List[SkillGroup]])),
    "workExperiences": ("work_experiences", TypeAdapter(Optional[List[WorkExperience]])),
    "projects": ("projects", TypeAdapter(Optional[List[ProjectEntry]])),
}


class GeneratedContent(_ResponseModel):
    """Resume content produced by the generation endpoint.

    Every field is optional; absence is meaningful to the merge step.
    """
    summary: Optional[str] = None
    skill_sections: Optional[List[SkillGroup]] = Field(default=None, alias="skillSections")
    work_experiences: Optional[List[WorkExperience]] = Field(default=None, alias="workExperiences")
    projects: Optional[List[ProjectEntry]] = None

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "GeneratedContent":
        """Validate a decoded response object one field at a time.

        Raises:
            ParseError: naming every field whose value has the wrong shape.
        """
        values: Dict[str, Any] = {}
        invalid: List[str] = []

        for wire_name, (attr, adapter) in _GENERATED_FIELDS.items():
            raw = data.get(wire_name, data.get(attr))
            try:
                values[attr] = adapter.validate_python(raw)
            except PydanticValidationError:
                invalid.append(wire_name)

        if invalid:
            raise ParseError(f"Generated content has invalid fields: {', '.join(invalid)}")

        return cls(**values)
