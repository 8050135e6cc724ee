"""
Unit tests for gigcrawler/modules/projects/models.py
"""

import json
from datetime import datetime

import pytest
from pydantic import ValidationError

from gigcrawler.modules.projects import (
    Platform,
    ProjectBatch,
    ProjectFixedWage,
    ProjectHidden,
    ProjectTimeWage,
    Range,
    WageType,
    WorkingTime,
    WorkingTimeUnit,
    dump_projects,
    load_projects,
)
from gigcrawler.utils.parsers import JST


@pytest.fixture
def fixed_project() -> ProjectFixedWage:
    return ProjectFixedWage(
        platform=Platform.COCONALA,
        external_id="3300001",
        url="https://coconala.com/requests/3300001",
        title="ロゴ作成",
        category="ロゴ作成・デザイン",
        description="<p>ロゴをお願いします</p>",
        publication_date=datetime(2025, 1, 10, tzinfo=JST),
        recruiting_limit=datetime(2025, 1, 20, tzinfo=JST),
        is_recruiting=True,
        budget=Range(min=5000, max=10000),
        delivery_date=None,
    )


@pytest.fixture
def time_project() -> ProjectTimeWage:
    return ProjectTimeWage(
        platform=Platform.CROWDWORKS,
        external_id="11000001",
        url="https://crowdworks.jp/public/jobs/11000001",
        title="データ入力",
        category="データ入力",
        description="<div>作業</div>",
        publication_date=datetime(2025, 1, 10, tzinfo=JST),
        recruiting_limit=datetime(2025, 1, 20, tzinfo=JST),
        is_recruiting=False,
        hourly_budget=Range(min=1000, max=1500),
        working_time=WorkingTime(unit=WorkingTimeUnit.WEEK, amount=10),
        period=Range(min=4, max=12),
    )


# ============================================================
# Range tests
# ============================================================


class TestRange:
    """Tests for Range model."""

    def test_point(self):
        assert Range.point(5000) == Range(min=5000, max=5000)

    def test_half_open(self):
        assert Range(max=5000).min is None

    def test_rejects_inverted(self):
        with pytest.raises(ValidationError):
            Range(min=10, max=5)


# ============================================================
# Project tests
# ============================================================


class TestProject:
    """Tests for project variants."""

    def test_hidden_has_only_key(self):
        project = ProjectHidden(platform=Platform.LANCERS, external_id="123")
        assert project.hidden is True
        assert project.model_dump(by_alias=True) == {
            "platform": "lancers",
            "externalId": "123",
            "hidden": True,
        }

    def test_hidden_rejects_extra_fields(self):
        with pytest.raises(ValidationError):
            ProjectHidden(platform=Platform.LANCERS, external_id="123", title="x")

    def test_empty_external_id(self):
        with pytest.raises(ValidationError):
            ProjectHidden(platform=Platform.LANCERS, external_id="")

    def test_key(self, fixed_project):
        assert fixed_project.key == (Platform.COCONALA, "3300001")

    def test_wage_type_defaults(self, fixed_project, time_project):
        assert fixed_project.wage_type is WageType.FIXED
        assert time_project.wage_type is WageType.TIME

    def test_frozen(self, fixed_project):
        with pytest.raises(ValidationError):
            fixed_project.title = "changed"


# ============================================================
# Serialization tests
# ============================================================


class TestSerialization:
    """Tests for batch JSON dump and load."""

    def test_camel_case_keys(self, time_project):
        data = json.loads(dump_projects([time_project]))
        assert data[0]["wageType"] == "time"
        assert data[0]["hourlyBudget"] == {"min": 1000, "max": 1500}
        assert data[0]["workingTime"] == {"unit": "week", "amount": 10}
        assert data[0]["isRecruiting"] is False

    def test_absent_optional_is_null(self, fixed_project):
        data = json.loads(dump_projects([fixed_project]))
        assert data[0]["deliveryDate"] is None

    def test_dates_keep_offset(self, fixed_project):
        data = json.loads(dump_projects([fixed_project]))
        assert data[0]["publicationDate"] == "2025-01-10T00:00:00+09:00"

    def test_batch_round_trip(self, fixed_project, time_project):
        hidden = ProjectHidden(platform=Platform.LANCERS, external_id="42")
        batch = [fixed_project, hidden, time_project]

        loaded = load_projects(dump_projects(batch))

        assert loaded == batch
        assert [type(p) for p in loaded] == [ProjectFixedWage, ProjectHidden, ProjectTimeWage]

    def test_validate_snake_case_input(self):
        loaded = ProjectBatch.validate_python(
            [{"platform": "lancers", "external_id": "1", "hidden": True}]
        )
        assert loaded == [ProjectHidden(platform=Platform.LANCERS, external_id="1")]

    def test_unknown_wage_type(self):
        with pytest.raises(ValidationError):
            ProjectBatch.validate_python([{"platform": "lancers", "externalId": "1", "wageType": "daily"}])
