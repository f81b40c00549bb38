"""Career catalog.

Public API:
    - Career: catalog entry model
    - CatalogService: validate and load catalogs from YAML/JSON
    - CatalogEntryError: raised for malformed entries
"""

from career_compass.catalog.models import (
    Career,
    CareerArchetype,
    CareerSalaryRange,
    CareerWorkEnvironment,
    CatalogEntryError,
    DailyTask,
    EducationRequirements,
    JobOutlook,
    SkillImportance,
    SkillRequirement,
)
from career_compass.catalog.service import (
    CatalogLoadResult,
    CatalogService,
    SkippedEntry,
    parse_career,
)

__all__ = [
    "Career",
    "CareerArchetype",
    "CareerSalaryRange",
    "CareerWorkEnvironment",
    "CatalogEntryError",
    "CatalogLoadResult",
    "CatalogService",
    "DailyTask",
    "EducationRequirements",
    "JobOutlook",
    "SkillImportance",
    "SkillRequirement",
    "SkippedEntry",
    "parse_career",
]
