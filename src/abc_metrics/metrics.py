"""
ABC metric data model and scoring.

The ABC score is sqrt(A² + B² + C²) where A counts assignments, B counts
branches (function and method calls) and C counts conditions (if, for,
switch, case, logical operators).
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from abc_metrics.config import SEVERITY_CEILING_LABEL, SEVERITY_THRESHOLDS


@dataclass(frozen=True)
class Evidence:
    """A single node that contributed to a metric."""

    line: int
    column: int
    text: str
    context: str


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"

    def __str__(self) -> str:
        return self.value


def severity_level(score: float) -> Severity:
    """
    Map an ABC score to a severity bucket.

    Buckets are closed on the low side: exactly 10.0 is Medium, 20.0 is
    High and 40.0 is Very High.
    """
    for bound, label in SEVERITY_THRESHOLDS:
        if score < bound:
            return Severity(label)
    return Severity(SEVERITY_CEILING_LABEL)


@dataclass
class ABCMetrics:
    """
    Assignment, Branch and Condition counts for one analyzed unit.

    Each count always equals the length of its evidence list, except that
    one assignment record may stand for several targets. Use the add_*
    methods rather than touching the fields directly.
    """

    assignments: int = 0
    branches: int = 0
    conditions: int = 0
    assignment_list: List[Evidence] = field(default_factory=list)
    branch_list: List[Evidence] = field(default_factory=list)
    condition_list: List[Evidence] = field(default_factory=list)

    def add_assignment(self, evidence: Evidence, targets: int = 1) -> None:
        self.assignments += targets
        self.assignment_list.append(evidence)

    def add_branch(self, evidence: Evidence) -> None:
        self.branches += 1
        self.branch_list.append(evidence)

    def add_condition(self, evidence: Evidence) -> None:
        self.conditions += 1
        self.condition_list.append(evidence)

    def score(self) -> float:
        return math.sqrt(
            self.assignments * self.assignments
            + self.branches * self.branches
            + self.conditions * self.conditions
        )

    def severity(self) -> Severity:
        return severity_level(self.score())

    def render(self) -> str:
        return (
            f"ABC: {self.score():.2f} "
            f"(A={self.assignments}, B={self.branches}, C={self.conditions})"
        )

    __str__ = render

    def render_details(self) -> str:
        """Numbered evidence listing: assignments, then branches, then conditions."""
        sections = (
            ("Assignments", self.assignment_list),
            ("Branches", self.branch_list),
            ("Conditions", self.condition_list),
        )
        lines: List[str] = []
        for title, items in sections:
            lines.append("")
            lines.append(f"{title}:")
            for i, item in enumerate(items, start=1):
                lines.append(f"  {i}. Line {item.line}: {item.text} ({item.context})")
        return "\n".join(lines)


def combine_metrics(*metrics: ABCMetrics) -> ABCMetrics:
    """Sum the counts and concatenate the evidence lists, left to right."""
    combined = ABCMetrics()
    for m in metrics:
        combined.assignments += m.assignments
        combined.branches += m.branches
        combined.conditions += m.conditions
        combined.assignment_list.extend(m.assignment_list)
        combined.branch_list.extend(m.branch_list)
        combined.condition_list.extend(m.condition_list)
    return combined
