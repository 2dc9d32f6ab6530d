"""List the job-function catalog, optionally filtered by a search term."""

import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from resume_builder.core import filter_categories
from resume_builder.models import AppConfig
from resume_builder.services import CategoryService


async def list_job_functions(term: str = ""):
    config = AppConfig()

    async with CategoryService(config.api) as service:
        categories = await service.fetch_job_functions()

    for category in filter_categories(categories, term):
        print(f"{category.name}")
        for subcategory in category.subcategories:
            print(f"  {subcategory.name}: {', '.join(subcategory.roles)}")
        print()


if __name__ == "__main__":
    asyncio.run(list_job_functions(" ".join(sys.argv[1:])))
