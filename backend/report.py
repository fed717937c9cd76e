"""Assemble the audit report returned by POST /audit."""

from datetime import datetime, timezone

from aggregator import AuditSummary
from models import CategoryScore, WebsiteSignals
from schemas import AuditReport


def _iso_timestamp(now: datetime | None = None) -> str:
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_report(
    *,
    website_url: str,
    amazon_asin: str | None,
    website: WebsiteSignals,
    scores: list[CategoryScore],
    summary: AuditSummary,
    now: datetime | None = None,
) -> AuditReport:
    """
    Wrap aggregator output with request metadata.

    all_details repeats the category scores; older clients read it instead
    of `categories`.
    """
    return AuditReport(
        overall_score=summary.overall_score,
        domain=website.domain,
        website_url=website_url,
        amazon_asin=amazon_asin or None,
        timestamp=_iso_timestamp(now),
        categories=list(scores),
        top_recommendations=summary.top_recommendations,
        all_details=[s.model_copy() for s in scores],
    )
