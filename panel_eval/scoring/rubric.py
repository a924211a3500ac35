"""
Rubric Model
-------------
Static definition of the weighted scoring rubric: ordered categories, each
owning ordered criteria. Weights are percentages of the whole rubric.

Consistency rules (checked once at startup by validate_rubric):
    Σ criterion weights within a category == category weight
    Σ category weights                      == 100
Both sums are compared exactly (Decimal arithmetic, tolerance 0).

Default rubric (MEDIA domain):
    relevance_experience      25
    project_understanding     20
    approach_methodology      26
    cost_value                14
    references_testimonials   10
    deliverables               5
"""
import json
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import structlog

from panel_eval.core.exceptions import ConfigurationError, UnknownCriterion, WeightMismatch

logger = structlog.get_logger(__name__)

RUBRIC_TOTAL = Decimal("100")


@dataclass(frozen=True)
class Criterion:
    key: str
    display_text: str
    weight_percent: float


@dataclass(frozen=True)
class Category:
    key: str
    name: str
    weight_percent: float
    criteria: Tuple[Criterion, ...] = field(default_factory=tuple)


class Rubric:
    """Immutable, process-wide rubric with criterion lookups."""

    def __init__(self, domain: str, categories: List[Category]):
        self.domain = domain
        self._categories: Tuple[Category, ...] = tuple(categories)
        self._criteria: Dict[str, Criterion] = {}
        self._category_by_criterion: Dict[str, str] = {}

        seen_categories = set()
        for category in self._categories:
            if category.key in seen_categories:
                raise ConfigurationError(f"Duplicate category key '{category.key}'")
            seen_categories.add(category.key)
            for criterion in category.criteria:
                if criterion.key in self._criteria:
                    raise ConfigurationError(f"Duplicate criterion key '{criterion.key}'")
                self._criteria[criterion.key] = criterion
                self._category_by_criterion[criterion.key] = category.key

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self._categories

    def criteria_keys(self) -> Tuple[str, ...]:
        """Criterion keys in rubric order."""
        return tuple(self._criteria.keys())

    def has_criterion(self, criterion_key: str) -> bool:
        return criterion_key in self._criteria

    def criterion(self, criterion_key: str) -> Criterion:
        try:
            return self._criteria[criterion_key]
        except KeyError:
            raise UnknownCriterion([criterion_key]) from None

    def weight_of(self, criterion_key: str) -> float:
        return self.criterion(criterion_key).weight_percent

    def category_of(self, criterion_key: str) -> str:
        self.criterion(criterion_key)
        return self._category_by_criterion[criterion_key]

    def criteria_for(self, category_key: str) -> Tuple[Criterion, ...]:
        for category in self._categories:
            if category.key == category_key:
                return category.criteria
        raise ConfigurationError(f"Unknown category '{category_key}'")

    @property
    def total_weight(self) -> float:
        return sum(c.weight_percent for c in self._criteria.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "categories": [
                {
                    "key": cat.key,
                    "name": cat.name,
                    "weight_percent": cat.weight_percent,
                    "criteria": [
                        {
                            "key": crit.key,
                            "display_text": crit.display_text,
                            "weight_percent": crit.weight_percent,
                        }
                        for crit in cat.criteria
                    ],
                }
                for cat in self._categories
            ],
        }


def _exact(value: float) -> Decimal:
    return Decimal(str(value))


def validate_rubric(rubric: Rubric) -> None:
    """
    Check weight consistency exactly.

    Raises:
        WeightMismatch: first category whose criteria do not sum to its share,
            or (category_key=None) when category shares do not sum to 100.
    """
    for category in rubric.categories:
        expected = _exact(category.weight_percent)
        actual = sum((_exact(c.weight_percent) for c in category.criteria), Decimal("0"))
        if actual != expected:
            logger.error(
                "rubric_weight_mismatch",
                category_key=category.key,
                expected=str(expected),
                actual=str(actual),
            )
            raise WeightMismatch(category.key, expected, actual)

    total = sum((_exact(c.weight_percent) for c in rubric.categories), Decimal("0"))
    if total != RUBRIC_TOTAL:
        logger.error("rubric_weight_mismatch", category_key=None, expected="100", actual=str(total))
        raise WeightMismatch(None, RUBRIC_TOTAL, total)

    logger.info(
        "rubric_validated",
        domain=rubric.domain,
        categories=len(rubric.categories),
        criteria=len(rubric.criteria_keys()),
    )


def rubric_from_dict(data: Dict[str, Any]) -> Rubric:
    """Build a Rubric from its JSON representation (see Rubric.to_dict)."""
    try:
        categories = [
            Category(
                key=str(cat["key"]),
                name=str(cat.get("name", cat["key"])),
                weight_percent=float(cat["weight_percent"]),
                criteria=tuple(
                    Criterion(
                        key=str(crit["key"]),
                        display_text=str(crit.get("display_text", crit["key"])),
                        weight_percent=float(crit["weight_percent"]),
                    )
                    for crit in cat.get("criteria", [])
                ),
            )
            for cat in data["categories"]
        ]
        return Rubric(domain=str(data.get("domain", "DEFAULT")), categories=categories)
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Malformed rubric definition: {e}") from e


def load_rubric(path: Optional[str] = None) -> Rubric:
    """Load a rubric from a JSON file, or the built-in MEDIA rubric when path is None."""
    if path is None:
        return MEDIA_RUBRIC
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read rubric file {path}: {e}") from e
    return rubric_from_dict(data)


# ---------------------------------------------------------------------------
# Built-in MEDIA rubric
# ---------------------------------------------------------------------------

MEDIA_RUBRIC = Rubric(
    domain="MEDIA",
    categories=[
        Category(
            key="relevance_experience",
            name="Relevance and Quality of Experience",
            weight_percent=25,
            criteria=(
                Criterion(
                    "experience",
                    "Evidence of experience in AI & Data strategy development and media "
                    "technology transformation within the broadcasting sector",
                    10,
                ),
                Criterion(
                    "case_studies",
                    "Case studies of similar transformation initiatives and their outcomes",
                    10,
                ),
                Criterion(
                    "domain_experience",
                    "Experience applying AI to content workflows, operational efficiency "
                    "and audience engagement",
                    5,
                ),
            ),
        ),
        Category(
            key="project_understanding",
            name="Understanding of Project Objectives",
            weight_percent=20,
            criteria=(
                Criterion(
                    "approach_alignment",
                    "Alignment of the proposed approach with the mission and objectives",
                    7,
                ),
                Criterion(
                    "understanding_challenges",
                    "Understanding of challenges and strategic goals",
                    7,
                ),
                Criterion(
                    "solution_tailoring",
                    "Ability to tailor solutions to specific operational and strategic needs",
                    6,
                ),
            ),
        ),
        Category(
            key="approach_methodology",
            name="Proposed Approach and Methodology",
            weight_percent=26,
            criteria=(
                Criterion(
                    "strategy_alignment",
                    "Alignment of the strategy with the transformation objectives",
                    7,
                ),
                Criterion(
                    "methodology",
                    "Delivery methodology including timelines, milestones and deliverables",
                    6,
                ),
                Criterion(
                    "innovative_strategies",
                    "Innovative strategies for cloud integration, AI, workflow optimization "
                    "and change management",
                    5,
                ),
                Criterion(
                    "stakeholder_engagement",
                    "Stakeholder engagement, risk management, cybersecurity and compliance",
                    5,
                ),
                Criterion(
                    "tools_framework",
                    "Tools, frameworks and methodologies used in similar engagements",
                    3,
                ),
            ),
        ),
        Category(
            key="cost_value",
            name="Cost and Value for Money",
            weight_percent=14,
            criteria=(
                Criterion("cost_structure", "Preliminary cost structure per phase and deliverable", 6),
                Criterion(
                    "cost_effectiveness",
                    "Cost-effectiveness, reuse of existing infrastructure and hybrid models",
                    5,
                ),
                Criterion("roi", "Anticipated return on investment", 3),
            ),
        ),
        Category(
            key="references_testimonials",
            name="References and Testimonials",
            weight_percent=10,
            criteria=(
                Criterion("references", "At least two references from comparable engagements", 6),
                Criterion("testimonials", "Testimonials or case studies from previous projects", 2),
                Criterion(
                    "sustainability",
                    "Ability to deliver sustainable outcomes and long-term partnerships",
                    2,
                ),
            ),
        ),
        Category(
            key="deliverables",
            name="Deliverable Completeness",
            weight_percent=5,
            criteria=(
                Criterion("deliverables", "All requested deliverables are submitted", 5),
            ),
        ),
    ],
)
