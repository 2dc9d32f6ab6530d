"""Skill correlation between a job analysis and the candidate's skills."""

from typing import Iterable, List, Set

from ..models import JobAnalysisResult, SkillMatch


def is_skill_present(skill: str, current_skills: Iterable[str]) -> bool:
    """True if ``skill`` and some current skill contain one another.

    Case-insensitive substring containment in either direction, so
    "React" covers "React.js" and "Golang" covers "Go".
    """
    needle = skill.lower()
    for current in current_skills:
        candidate = current.lower()
        if needle in candidate or candidate in needle:
            return True
    return False


def build_skill_matches(
    result: JobAnalysisResult,
    current_skills: List[str],
) -> List[SkillMatch]:
    """Pair every extracted skill with whether the candidate has it."""
    return [
        SkillMatch(
            name=skill.name,
            required=skill.required,
            importance=skill.importance,
            category=skill.category,
            present=is_skill_present(skill.name, current_skills),
        )
        for skill in result.extracted_skills
    ]


def initial_selection(matches: Iterable[SkillMatch]) -> Set[str]:
    """Pre-select every required skill the candidate is missing."""
    return {match.name for match in matches if match.required and not match.present}


def toggle_skill(selected: Set[str], skill: str) -> Set[str]:
    """Return a new selection with ``skill`` added or removed."""
    updated = set(selected)
    if skill in updated:
        updated.remove(skill)
    else:
        updated.add(skill)
    return updated
