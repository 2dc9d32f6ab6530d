"""Structured resume as produced by the PDF parser.

Mirrors the section layout a resume PDF is read into: one profile block,
then lists of dated entries whose body is a list of description lines.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class _ParsedModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ParsedProfile(_ParsedModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    url: str = ""
    summary: str = ""
    location: str = ""


class ParsedWorkExperience(_ParsedModel):
    company: str = ""
    job_title: str = Field(default="", alias="jobTitle")
    date: str = ""
    descriptions: List[str] = Field(default_factory=list)


class ParsedEducation(_ParsedModel):
    school: str = ""
    degree: str = ""
    date: str = ""
    gpa: str = ""
    descriptions: List[str] = Field(default_factory=list)


class ParsedProject(_ParsedModel):
    project: str = ""
    date: str = ""
    descriptions: List[str] = Field(default_factory=list)


class FeaturedSkill(_ParsedModel):
    skill: str = ""
    rating: int = 0


class ParsedSkills(_ParsedModel):
    featured_skills: List[FeaturedSkill] = Field(default_factory=list, alias="featuredSkills")
    descriptions: List[str] = Field(default_factory=list)


class StructuredResume(_ParsedModel):
    profile: ParsedProfile = Field(default_factory=ParsedProfile)
    work_experiences: List[ParsedWorkExperience] = Field(
        default_factory=list, alias="workExperiences"
    )
    educations: List[ParsedEducation] = Field(default_factory=list)
    projects: List[ParsedProject] = Field(default_factory=list)
    skills: ParsedSkills = Field(default_factory=ParsedSkills)
