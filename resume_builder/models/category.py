"""Job-function catalog returned by the category endpoint."""

from typing import List, Optional

from pydantic import BaseModel, Field


class JobSubcategory(BaseModel):
    id: str = ""
    name: str
    description: Optional[str] = None
    roles: List[str] = Field(default_factory=list)


class JobCategory(BaseModel):
    id: str = ""
    type: str = "JOB_FUNCTION"
    name: str
    description: Optional[str] = None
    subcategories: List[JobSubcategory] = Field(default_factory=list)


class CategoryListResponse(BaseModel):
    categories: List[JobCategory] = Field(default_factory=list)
