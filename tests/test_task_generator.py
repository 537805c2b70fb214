"""
Tests for base, recurring and milestone task generation.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from task_wizard.planning.catalog import (
    RESIDENTIAL_TASKS,
    GENERIC_TASKS,
    MAX_RECURRING_INSTANCES,
    get_catalog,
)
from task_wizard.planning.task_generator import (
    analyze_project,
    estimate_project_scale,
    generate_base_tasks,
    generate_recurring_tasks,
    generate_milestone_tasks,
    get_suggested_tasks_by_phase,
)


MEDIUM_DESCRIPTION = (
    "Two-storey wood frame duplex with a full basement, attached garages, "
    "new utility connections, driveway paving and landscaping on a corner lot."
)


class TestProjectScale:
    def test_short_description_is_small(self):
        assert estimate_project_scale("New deck") == "small"

    def test_small_marker(self):
        assert estimate_project_scale("A minor change " + "x" * 200) == "small"

    def test_medium(self):
        assert len(MEDIUM_DESCRIPTION) >= 100
        assert estimate_project_scale(MEDIUM_DESCRIPTION) == "medium"

    def test_large_marker(self):
        assert estimate_project_scale(MEDIUM_DESCRIPTION + " A complex build.") == "large"

    def test_analyze_project_type(self):
        analysis = analyze_project("Elm School", "Library wing for the campus")
        assert analysis.project_type == "institutional"
        assert analysis.scale == "small"
        assert "library" in analysis.keywords


class TestCatalogLookup:
    def test_known_type(self):
        assert get_catalog("residential") is RESIDENTIAL_TASKS

    def test_case_insensitive(self):
        assert get_catalog(" Residential ") is RESIDENTIAL_TASKS

    @pytest.mark.parametrize("project_type", ["other", "mixed use", "", None])
    def test_generic_fallback(self, project_type):
        assert get_catalog(project_type) is GENERIC_TASKS

    def test_suggested_by_phase(self):
        titles = [t.title for t in get_suggested_tasks_by_phase("pre-construction")]
        assert "Site Survey and Preparation" in titles


class TestGenerateBaseTasks:
    def test_medium_keeps_every_template(self):
        tasks = generate_base_tasks("residential", MEDIUM_DESCRIPTION, "2025-01-01")
        assert [t.title for t in tasks] == [t.title for t in RESIDENTIAL_TASKS]
        assert tasks[0].estimated_hours == 16
        assert tasks[0].loe.optimistic_hours == 12
        assert tasks[0].loe.pessimistic_hours == 24

    def test_small_keeps_every_other_template(self):
        tasks = generate_base_tasks("residential", "Small addition", None)
        assert [t.title for t in tasks] == [t.title for t in RESIDENTIAL_TASKS[::2]]
        # 16h * 0.7 rounded up
        assert tasks[0].estimated_hours == 12

    def test_large_scales_hours_up(self):
        tasks = generate_base_tasks("residential", MEDIUM_DESCRIPTION + " Large build.", None)
        assert tasks[0].estimated_hours == 24
        assert tasks[0].loe.pessimistic_hours == 36

    def test_schedule_back_to_back(self):
        tasks = generate_base_tasks("residential", MEDIUM_DESCRIPTION, "2025-01-01")
        first, second = tasks[0], tasks[1]
        assert first.start_date == "2025-01-01"
        # 16h -> 2 days
        assert first.due_date == "2025-01-03"
        # inspected task adds a 2 day buffer
        assert second.start_date == "2025-01-05"

    def test_no_dates_without_start(self):
        tasks = generate_base_tasks("commercial", MEDIUM_DESCRIPTION, None)
        assert all(t.start_date is None and t.due_date is None for t in tasks)

    def test_chain_dependencies(self):
        tasks = generate_base_tasks("renovation", MEDIUM_DESCRIPTION, None)
        assert tasks[0].dependencies == []
        for previous, task in zip(tasks, tasks[1:]):
            assert [d.title for d in task.dependencies] == [previous.title]

    def test_default_risk_added(self):
        tasks = generate_base_tasks("other", MEDIUM_DESCRIPTION, None)
        assert all(t.risks for t in tasks)
        assert tasks[0].risks[0].type == "schedule"

    def test_generation_index_sequential(self):
        tasks = generate_base_tasks("industrial", MEDIUM_DESCRIPTION, None)
        assert [t.generation_index for t in tasks] == list(range(len(tasks)))

    @pytest.mark.parametrize("project_type", [None, "", "  "])
    def test_blank_type_inferred_from_text(self, project_type):
        description = MEDIUM_DESCRIPTION.replace("duplex", "office and retail block")
        tasks = generate_base_tasks(project_type, description, None, "Harbor Office Park")
        assert tasks[0].title == "Site Analysis and Preparation"

    def test_blank_type_defaults_to_residential(self):
        tasks = generate_base_tasks(None, MEDIUM_DESCRIPTION, None)
        assert [t.title for t in tasks] == [t.title for t in RESIDENTIAL_TASKS]

    def test_invalid_start_date_raises(self):
        with pytest.raises(ValueError):
            generate_base_tasks("residential", MEDIUM_DESCRIPTION, "2025-13-45")

    def test_templates_not_mutated(self):
        tasks = generate_base_tasks("residential", MEDIUM_DESCRIPTION, None)
        tasks[0].safety_requirements.append("Extra")
        assert "Extra" not in RESIDENTIAL_TASKS[0].safety_requirements


class TestGenerateRecurringTasks:
    @pytest.mark.parametrize("start,end", [
        (None, "2025-03-01"),
        ("2025-01-01", None),
        ("2025-03-01", "2025-01-01"),
    ])
    def test_empty_without_valid_span(self, start, end):
        assert generate_recurring_tasks(start, end) == []

    def test_phase_reviews_cover_span(self):
        tasks = generate_recurring_tasks("2025-01-01", "2025-03-01")
        reviews = [t for t in tasks if t.title.endswith("Phase Review")]
        assert [t.title for t in reviews] == [
            "Pre-Construction Phase Review",
            "Construction Phase Review",
            "Post-Construction Phase Review",
        ]
        assert reviews[0].start_date == "2025-01-01"
        assert reviews[-1].due_date == "2025-03-01"
        for a, b in zip(reviews, reviews[1:]):
            assert a.due_date == b.start_date

    def test_instance_counts(self):
        tasks = generate_recurring_tasks("2025-01-01", "2025-03-01")
        titles = [t.title for t in tasks]
        assert sum(t.startswith("Daily Safety Meeting") for t in titles) == 60
        assert sum(t.startswith("Weekly Progress Report") for t in titles) == 9
        assert sum(t.startswith("Monthly Equipment Inspection") for t in titles) == 2
        assert sum(t.startswith("Biweekly Quality Control Inspection") for t in titles) == 5

    def test_instances_within_span(self):
        tasks = generate_recurring_tasks("2025-01-01", "2025-03-01")
        for task in tasks:
            assert "2025-01-01" <= task.start_date <= "2025-03-01"

    def test_instance_titles_and_estimates(self):
        tasks = generate_recurring_tasks("2025-01-01", "2025-01-01")
        meeting = next(t for t in tasks if t.title == "Daily Safety Meeting (Instance 1)")
        assert meeting.due_date == "2025-01-02"
        assert meeting.loe.optimistic_hours == 0.4
        assert meeting.loe.pessimistic_hours == 0.6
        assert meeting.loe.skill_level_required == "basic"

    def test_instance_cap(self):
        tasks = generate_recurring_tasks("2025-01-01", "2026-12-31")
        meetings = [t for t in tasks if t.title.startswith("Daily Safety Meeting")]
        assert len(meetings) == MAX_RECURRING_INSTANCES

    def test_unrelated_phases_skip_templates(self):
        tasks = generate_recurring_tasks("2025-01-01", "2025-01-31", ("Design",))
        assert [t.title for t in tasks] == ["Design Phase Review"]

    def test_unique_titles(self):
        tasks = generate_recurring_tasks("2025-01-01", "2025-06-30")
        titles = [t.title for t in tasks]
        assert len(titles) == len(set(titles))

    def test_invalid_date_raises(self):
        with pytest.raises(ValueError):
            generate_recurring_tasks("2025-02-30", "2025-03-01")


class TestMilestoneTasks:
    def test_below_first_milestone(self):
        assert generate_milestone_tasks(10, date(2025, 5, 1)) == []

    def test_half_way(self):
        tasks = generate_milestone_tasks(50, date(2025, 5, 1))
        titles = [t.title for t in tasks]
        assert titles == [
            "First Quarter Review Meeting",
            "Budget Reconciliation",
            "Mid-Project Assessment",
        ]
        assert all(t.due_date == "2025-05-04" for t in tasks)
        # estimates are used as written
        assert tasks[1].loe.optimistic_hours == 1.5
