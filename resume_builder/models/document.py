"""Editor-side resume document.

Attributes are snake_case; the wire format uses the editor's camelCase
names through aliases. Unknown keys are kept so that a document passed
through the pipeline comes back with every editor field intact.
"""

from typing import List, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ValidationError

T = TypeVar("T")


class _EditorModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class SkillGroup(_EditorModel):
    """A named category holding an ordered list of skills."""
    name: str = ""
    skills: List[str] = Field(default_factory=list)


class WorkExperience(_EditorModel):
    position: Optional[str] = None
    company: Optional[str] = None
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    description: Optional[str] = None


class ProjectEntry(_EditorModel):
    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    url: Optional[str] = None


class Education(_EditorModel):
    degree: Optional[str] = None
    school: Optional[str] = None
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")


class ResumeDocument(_EditorModel):
    """The canonical working resume of an editing session.

    List sections are optional: ``None`` means the editor never filled
    the section in, which the generation merge treats differently from
    an empty list.
    """
    # === Personal info ===
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    job_title: Optional[str] = Field(default=None, alias="jobTitle")
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    website: Optional[str] = None

    # === Sections ===
    summary: Optional[str] = None
    skill_sections: Optional[List[SkillGroup]] = Field(
        default=None,
        alias="skillSections",
        description="Skill groups in display order"
    )
    work_experiences: Optional[List[WorkExperience]] = Field(
        default=None,
        alias="workExperiences",
        description="Work history in display order"
    )
    projects: Optional[List[ProjectEntry]] = None
    educations: Optional[List[Education]] = None

    selected_template: Optional[str] = Field(
        default=None,
        alias="selectedTemplate",
        description="Template used by the editor's renderer"
    )

    def to_payload(self) -> dict:
        """Serialize to the camelCase JSON shape the AI service expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def reorder(self, section: str, old_index: int, new_index: int) -> "ResumeDocument":
        """Return a copy with one list section reordered (drag-and-drop move)."""
        field_name = _SECTION_FIELDS.get(section, section)
        if field_name not in _REORDERABLE:
            raise ValidationError(f"Section cannot be reordered: {section}")

        items = getattr(self, field_name) or []
        return self.model_copy(
            update={field_name: move_entry(items, old_index, new_index)}
        )


_SECTION_FIELDS = {
    "skillSections": "skill_sections",
    "workExperiences": "work_experiences",
}
_REORDERABLE = {"skill_sections", "work_experiences", "projects", "educations"}


def move_entry(items: Sequence[T], old_index: int, new_index: int) -> List[T]:
    """Move one entry to a new position, returning a new list."""
    size = len(items)
    if not (0 <= old_index < size and 0 <= new_index < size):
        raise ValidationError(
            f"Cannot move entry {old_index} to {new_index} in a list of {size}"
        )

    moved = list(items)
    entry = moved.pop(old_index)
    moved.insert(new_index, entry)
    return moved


def flatten_skills(document: ResumeDocument) -> List[str]:
    """Every skill string across all skill groups, in display order."""
    skills: List[str] = []
    for group in document.skill_sections or []:
        skills.extend(group.skills)
    return skills
