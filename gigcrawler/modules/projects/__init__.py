"""Projects module."""

from gigcrawler.modules.projects.models import (
    Platform,
    Project,
    ProjectBatch,
    ProjectFixedWage,
    ProjectHidden,
    ProjectTimeWage,
    ProjectVisible,
    Range,
    WageType,
    WorkingTime,
    WorkingTimeUnit,
    dump_projects,
    load_projects,
)

__all__ = [
    "Platform",
    "Project",
    "ProjectBatch",
    "ProjectFixedWage",
    "ProjectHidden",
    "ProjectTimeWage",
    "ProjectVisible",
    "Range",
    "WageType",
    "WorkingTime",
    "WorkingTimeUnit",
    "dump_projects",
    "load_projects",
]
