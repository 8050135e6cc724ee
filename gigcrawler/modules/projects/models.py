"""
Project Models.

Pydantic models for normalized freelance-job listings.

A listing is a tagged union on two axes: visibility (hidden listings carry
only their key) and wage type (fixed lump sum vs. time-based pay).
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    model_validator,
)
from pydantic.alias_generators import to_camel


class Platform(str, Enum):
    """Supported marketplaces."""

    COCONALA = "coconala"
    CROWDWORKS = "crowdworks"
    LANCERS = "lancers"


class WageType(str, Enum):
    FIXED = "fixed"
    TIME = "time"


class WorkingTimeUnit(str, Enum):
    WEEK = "week"
    MONTH = "month"


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class Range(_Model):
    """
    Closed or half-open integer range.

    Either end may be absent ("5千円未満" has no lower bound). A single
    value is represented as min == max.
    """

    min: int | None = None
    max: int | None = None

    @model_validator(mode="after")
    def check_order(self) -> "Range":
        """Reject ranges whose lower bound exceeds the upper bound."""
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self

    @classmethod
    def point(cls, value: int) -> "Range":
        return cls(min=value, max=value)


class WorkingTime(_Model):
    """Expected workload, in hours per unit."""

    unit: WorkingTimeUnit
    amount: int = Field(ge=0)


class ProjectBase(_Model):
    platform: Platform
    external_id: str = Field(min_length=1)

    @property
    def key(self) -> tuple[Platform, str]:
        """Idempotency key for upserts across re-crawls."""
        return self.platform, self.external_id


class ProjectHidden(ProjectBase):
    """Listing whose detail page withholds content from crawlers."""

    hidden: Literal[True] = True


class ProjectVisible(ProjectBase):
    """Fields shared by every visible listing."""

    hidden: Literal[False] = False
    url: str
    title: str
    category: str
    description: str = Field(description="Raw HTML fragment")
    publication_date: datetime
    recruiting_limit: datetime | None = None
    is_recruiting: bool


class ProjectFixedWage(ProjectVisible):
    wage_type: Literal[WageType.FIXED] = WageType.FIXED
    budget: Range | None = None
    delivery_date: datetime | None = None


class ProjectTimeWage(ProjectVisible):
    wage_type: Literal[WageType.TIME] = WageType.TIME
    hourly_budget: Range | None = None
    working_time: WorkingTime | None = None
    period: Range | None = Field(default=None, description="Engagement length in weeks")


def _project_tag(value: Any) -> str | None:
    """Pick the union member for raw dicts (either alias) or model instances."""
    if isinstance(value, dict):
        hidden = value.get("hidden")
        wage_type = value.get("wageType", value.get("wage_type"))
    else:
        hidden = getattr(value, "hidden", None)
        wage_type = getattr(value, "wage_type", None)

    if hidden:
        return "hidden"
    if wage_type is None:
        return None
    try:
        return WageType(wage_type).value
    except ValueError:
        return None


Project = Annotated[
    Union[
        Annotated[ProjectHidden, Tag("hidden")],
        Annotated[ProjectFixedWage, Tag(WageType.FIXED.value)],
        Annotated[ProjectTimeWage, Tag(WageType.TIME.value)],
    ],
    Discriminator(_project_tag),
]

ProjectBatch: TypeAdapter[list[Project]] = TypeAdapter(list[Project])


def dump_projects(projects: list[Project], indent: int | None = 2) -> bytes:
    """Serialize a batch to JSON using camelCase field names."""
    return ProjectBatch.dump_json(projects, by_alias=True, indent=indent)


def load_projects(data: str | bytes) -> list[Project]:
    """Parse a JSON batch produced by dump_projects."""
    return ProjectBatch.validate_json(data)
