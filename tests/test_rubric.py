# tests/test_rubric.py

"""
Rubric Tests - lookups, weight validation and JSON loading
"""

import json
from decimal import Decimal

import pytest

from panel_eval.core.exceptions import ConfigurationError, UnknownCriterion, WeightMismatch
from panel_eval.scoring.rubric import (
    Category,
    Criterion,
    Rubric,
    load_rubric,
    rubric_from_dict,
    validate_rubric,
)


class TestMediaRubric:
    """Tests for the built-in MEDIA rubric."""

    def test_media_rubric_is_consistent(self, media_rubric):
        validate_rubric(media_rubric)

    def test_category_weights(self, media_rubric):
        weights = {c.key: c.weight_percent for c in media_rubric.categories}
        assert weights == {
            "relevance_experience": 25,
            "project_understanding": 20,
            "approach_methodology": 26,
            "cost_value": 14,
            "references_testimonials": 10,
            "deliverables": 5,
        }

    def test_eighteen_criteria_in_order(self, media_rubric):
        keys = media_rubric.criteria_keys()
        assert len(keys) == 18
        assert keys[0] == "experience"
        assert keys[-1] == "deliverables"

    def test_lookups(self, media_rubric):
        assert media_rubric.weight_of("roi") == 3
        assert media_rubric.category_of("roi") == "cost_value"
        assert media_rubric.has_criterion("roi")
        assert not media_rubric.has_criterion("price")
        assert [c.key for c in media_rubric.criteria_for("deliverables")] == ["deliverables"]

    def test_unknown_criterion_lookup(self, media_rubric):
        with pytest.raises(UnknownCriterion) as exc:
            media_rubric.weight_of("price")
        assert exc.value.keys == ["price"]

    def test_default_load_returns_media(self, media_rubric):
        assert load_rubric() is media_rubric


class TestValidateRubric:
    """Tests for exact weight consistency checks."""

    def test_category_mismatch(self):
        rubric = Rubric(
            domain="BROKEN",
            categories=[
                Category("one", "One", 60, (Criterion("a", "a", 30), Criterion("b", "b", 20))),
                Category("two", "Two", 40, (Criterion("c", "c", 40),)),
            ],
        )
        with pytest.raises(WeightMismatch) as exc:
            validate_rubric(rubric)
        assert exc.value.category_key == "one"
        assert exc.value.expected == Decimal("60")
        assert exc.value.actual == Decimal("50")

    def test_total_mismatch(self):
        rubric = Rubric(
            domain="BROKEN",
            categories=[
                Category("one", "One", 50, (Criterion("a", "a", 50),)),
                Category("two", "Two", 40, (Criterion("b", "b", 40),)),
            ],
        )
        with pytest.raises(WeightMismatch) as exc:
            validate_rubric(rubric)
        assert exc.value.category_key is None

    def test_fractional_weights_compared_exactly(self):
        rubric = Rubric(
            domain="FRACTIONAL",
            categories=[
                Category(
                    "one",
                    "One",
                    0.3,
                    (Criterion("a", "a", 0.1), Criterion("b", "b", 0.2)),
                ),
                Category("two", "Two", 99.7, (Criterion("c", "c", 99.7),)),
            ],
        )
        validate_rubric(rubric)

    def test_weight_mismatch_is_configuration_error(self):
        assert issubclass(WeightMismatch, ConfigurationError)

    def test_duplicate_criterion_key(self):
        with pytest.raises(ConfigurationError):
            Rubric(
                domain="DUP",
                categories=[
                    Category("one", "One", 50, (Criterion("a", "a", 50),)),
                    Category("two", "Two", 50, (Criterion("a", "a", 50),)),
                ],
            )


class TestLoadRubric:
    """Tests for JSON rubric definitions."""

    def test_round_trip_through_dict(self, media_rubric):
        rebuilt = rubric_from_dict(media_rubric.to_dict())
        assert rebuilt.criteria_keys() == media_rubric.criteria_keys()
        validate_rubric(rebuilt)

    def test_load_from_file(self, tmp_path, cost_rubric):
        path = tmp_path / "rubric.json"
        path.write_text(json.dumps(cost_rubric.to_dict()), encoding="utf-8")
        loaded = load_rubric(str(path))
        assert loaded.domain == "TEST"
        assert loaded.weight_of("A") == 60

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_rubric(str(tmp_path / "missing.json"))

    def test_malformed_definition(self):
        with pytest.raises(ConfigurationError):
            rubric_from_dict({"domain": "X", "categories": [{"name": "no key"}]})
