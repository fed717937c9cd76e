"""Combine category scores into an overall score and ranked recommendations."""

import math
import re
from dataclasses import dataclass

from models import CategoryScore, Detail
from schemas import Recommendation

MAX_NEGATIVES = 10
TOP_RECOMMENDATIONS = 5
_FIRST_INTEGER = re.compile(r"\d+")


@dataclass(frozen=True)
class AuditSummary:
    overall_score: int
    negatives: list[Detail]
    recommendations: list[Recommendation]
    top_recommendations: list[Recommendation]


def parse_impact_magnitude(impact_text: str) -> int | None:
    """
    Return the first run of digits in an impact text, or None.

    Signs are ignored: "-20% conversion" and "+3-8% conversion" give 20 and 3.
    """
    match = _FIRST_INTEGER.search(impact_text or "")
    return int(match.group(0)) if match else None


def overall_score(scores: list[CategoryScore]) -> int:
    """Unweighted mean, rounded half up."""
    if not scores:
        return 0
    mean = sum(s.score for s in scores) / len(scores)
    return math.floor(mean + 0.5)


def collect_negatives(scores: list[CategoryScore], limit: int = MAX_NEGATIVES) -> list[Detail]:
    negatives = [d for s in scores for d in s.details if not d.is_positive]
    return negatives[:limit]


def rank_recommendations(negatives: list[Detail]) -> list[Recommendation]:
    """Highest impact first; equal (or missing) magnitudes keep their order."""
    recommendations = [
        Recommendation(issue=d.text, impact=d.impact_text, priority="HIGH") for d in negatives
    ]
    return sorted(recommendations, key=lambda r: -(parse_impact_magnitude(r.impact) or 0))


def aggregate(scores: list[CategoryScore]) -> AuditSummary:
    negatives = collect_negatives(scores)
    ranked = rank_recommendations(negatives)
    return AuditSummary(
        overall_score=overall_score(scores),
        negatives=negatives,
        recommendations=ranked,
        top_recommendations=ranked[:TOP_RECOMMENDATIONS],
    )
