"""Job-function tag selection over the category catalog."""

import logging
from typing import List

from ..models import JobCategory

logger = logging.getLogger(__name__)


def filter_categories(categories: List[JobCategory], term: str) -> List[JobCategory]:
    """Keep roles matching ``term`` by role, subcategory or category name.

    Matching is case-insensitive substring containment. Subcategories left
    with no roles, and categories left with no subcategories, are dropped.
    """
    needle = term.lower()
    filtered: List[JobCategory] = []

    for category in categories:
        category_hit = needle in category.name.lower()
        subcategories = []
        for subcategory in category.subcategories:
            subcategory_hit = category_hit or needle in subcategory.name.lower()
            roles = [
                role for role in subcategory.roles
                if subcategory_hit or needle in role.lower()
            ]
            if roles:
                subcategories.append(subcategory.model_copy(update={"roles": roles}))

        if subcategories:
            filtered.append(category.model_copy(update={"subcategories": subcategories}))

    return filtered


class JobFunctionSelection:
    """Tag-style multi-select whose value is the comma-joined tag list.

    Usage:
        selection = JobFunctionSelection(categories)
        selection.search("data")
        selection.select("Data Engineer")
        selection.value  # "Data Engineer"
    """

    SEPARATOR = ", "

    def __init__(self, categories: List[JobCategory]):
        self.categories = categories
        self.search_term = ""
        self._tags: List[str] = []

    @property
    def tags(self) -> List[str]:
        return list(self._tags)

    @property
    def value(self) -> str:
        return self.SEPARATOR.join(self._tags)

    def search(self, term: str) -> List[JobCategory]:
        self.search_term = term
        return self.options()

    def options(self) -> List[JobCategory]:
        return filter_categories(self.categories, self.search_term)

    def select(self, tag: str) -> str:
        """Append ``tag`` unless already selected; always clears the search."""
        if tag not in self._tags:
            self._tags.append(tag)
        else:
            logger.debug(f"Job function already selected: {tag}")
        self.search_term = ""
        return self.value

    def remove(self, tag: str) -> str:
        self._tags = [t for t in self._tags if t != tag]
        return self.value
