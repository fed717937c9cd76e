"""Rule-based category scorers.

Each scorer is a pure function over one signal record and returns a single
CategoryScore. Details are appended in evaluation order; the aggregator
relies on that order when it picks recommendations.
"""

from dataclasses import dataclass
from typing import Callable

from models import (
    MAX_SCORE,
    PRICE_UNAVAILABLE,
    Category,
    CategoryScore,
    Detail,
    ListingSignals,
    WebsiteSignals,
)

KB = 1024
# (upper bound in KB, exclusive) -> estimated speed score
SPEED_BUCKETS: list[tuple[int, int]] = [(300, 85), (500, 75), (800, 65)]
SLOWEST_SPEED = 55
MANY_IMAGES = 15


class ScoringError(RuntimeError):
    """A scorer produced a result that breaks the CategoryScore contract."""


def _plus(text: str, impact: str) -> Detail:
    return Detail(is_positive=True, text=text, impact_text=impact)


def _minus(text: str, impact: str) -> Detail:
    return Detail(is_positive=False, text=text, impact_text=impact)


def _fmt_number(value: float) -> str:
    """Render 4.0 as "4" and 4.5 as "4.5"."""
    return str(int(value)) if float(value).is_integer() else str(value)


def _listing_found(listing: ListingSignals | None) -> bool:
    return listing is not None and listing.found


def estimate_page_speed(page_size: int) -> int:
    """Size-based speed proxy; sizes at a bound fall into the slower bucket."""
    size_kb = page_size / KB
    for upper_kb, speed in SPEED_BUCKETS:
        if size_kb < upper_kb:
            return speed
    return SLOWEST_SPEED


def parse_price(raw: str) -> float | None:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def score_product_data(website: WebsiteSignals) -> CategoryScore:
    score = 0
    details: list[Detail] = []

    if website.images >= 6:
        score += 20
        details.append(_plus(f"Good image count: {website.images} images", "High visibility signal"))
    elif website.images >= 3:
        score += 10
        details.append(_minus(f"Only {website.images} images (target: 6+)", "Missing visibility opportunity"))
    else:
        details.append(_minus(f"Too few images: {website.images}", "-5% visibility"))

    if website.product_images >= 3:
        score += 15
        details.append(_plus(f"{website.product_images} dedicated product images", "Better conversion potential"))
    else:
        score -= 5
        details.append(_minus(f"Only {website.product_images} product-specific images", "-3% conversion"))

    if website.description_quality > 50:
        score += 20
        details.append(_plus("Rich descriptions with specifications", "Better SEO + conversion"))
    elif website.description_quality > 20:
        score += 10
        details.append(_minus("Descriptions could be more detailed", "-3% conversion"))
    else:
        score -= 10
        details.append(_minus("Minimal product descriptions", "-8% conversion"))

    if website.has_schema:
        score += 15
        details.append(_plus("Schema markup detected", "Better Google parsing"))
    else:
        details.append(_minus("No schema markup found", "-2% Google Shopping visibility"))

    # no H1 at all is neither rewarded nor reported here
    if website.h1_count == 1:
        score += 10
        details.append(_plus("Good heading structure (1 H1)", "Better SEO"))
    elif website.h1_count > 1:
        score -= 5
        details.append(_minus(f"Multiple H1 tags ({website.h1_count})", "Confuses search engines"))

    return CategoryScore(
        category=Category.PRODUCT_DATA,
        score=min(score, MAX_SCORE),
        details=tuple(details),
        impact_summary="+12-18% visibility",
    )


def score_review_authority(listing: ListingSignals | None) -> CategoryScore:
    if not _listing_found(listing):
        return CategoryScore(
            category=Category.REVIEW_AUTHORITY,
            score=0,
            details=(_minus("ASIN not found or not provided", "Cannot assess Amazon visibility"),),
            impact_summary="N/A - No Amazon listing found",
        )

    score = 50
    details: list[Detail] = []
    rating = _fmt_number(listing.rating)
    reviews = listing.review_count

    if listing.rating >= 4.5:
        score += 25
        details.append(_plus(f"Strong rating: {rating}/5 stars", "Top quartile visibility"))
    elif listing.rating >= 4.0:
        score += 15
        details.append(_plus(f"Good rating: {rating}/5 stars", "Competitive"))
    elif listing.rating >= 3.5:
        score += 5
        details.append(_minus(f"Below average: {rating}/5 stars", "-5% visibility"))
    else:
        details.append(_minus(f"Poor rating: {rating}/5 stars", "-15% visibility"))

    if reviews >= 200:
        score += 25
        details.append(_plus(f"Strong review volume: {reviews} reviews", "Trust signal to buyers"))
    elif reviews >= 50:
        score += 15
        details.append(_plus(f"Decent review volume: {reviews} reviews", "Building credibility"))
    elif reviews >= 10:
        score += 5
        details.append(_minus(f"Limited reviews: {reviews}", "-10% visibility"))
    else:
        details.append(_minus(f"Very few reviews: {reviews}", "-20% visibility, low trust"))

    if 0 < reviews < 20:
        details.append(_minus("Low review velocity (need more reviews)", "-8% visibility"))

    return CategoryScore(
        category=Category.REVIEW_AUTHORITY,
        score=min(score, MAX_SCORE),
        details=tuple(details),
        impact_summary="+15-25% visibility, +10-20% conversion",
        listing_signals=listing,
    )


def score_pricing(listing: ListingSignals | None) -> CategoryScore:
    price = parse_price(listing.price) if _listing_found(listing) else None
    # scraper._normalize_price maps non-decimal text to PRICE_UNAVAILABLE; treat
    # any that slips through the same way rather than as a premium price
    if price is None or listing.price == PRICE_UNAVAILABLE:
        return CategoryScore(
            category=Category.PRICING,
            score=50,
            details=(_minus("Price data unavailable", "Cannot assess competitiveness"),),
            impact_summary="Unknown",
        )

    score = 60
    details: list[Detail] = []
    shown = _fmt_number(price)

    if 0 < price < 50:
        score += 15
        details.append(_plus(f"Budget-friendly price: ${shown}", "Larger addressable market"))
    elif 50 <= price < 200:
        score += 20
        details.append(_plus(f"Mid-range price: ${shown}", "Sweet spot for margins + volume"))
    else:
        score += 10
        details.append(_plus(f"Premium price: ${shown}", "Target affluent segment"))

    details.append(
        _minus(
            "Price competitiveness: Cannot compare without competitor data",
            "Need to analyze similar products",
        )
    )

    return CategoryScore(
        category=Category.PRICING,
        score=min(score, MAX_SCORE),
        details=tuple(details),
        impact_summary="+5-12% visibility, +15-35% conversion",
        listing_signals=listing,
    )


def score_trust(website: WebsiteSignals) -> CategoryScore:
    score = 0
    details: list[Detail] = []

    if website.has_ssl:
        score += 20
        details.append(_plus("SSL/HTTPS detected", "Basic security requirement met"))
    else:
        details.append(_minus("No SSL certificate (HTTP)", "Major trust issue, -20% conversion"))

    if website.has_about:
        score += 20
        details.append(_plus("About Us page found", "Brand storytelling present"))
    else:
        details.append(_minus("No About Us page", "-5% conversion (buyers want context)"))

    if website.has_faq:
        score += 15
        details.append(_plus("FAQ section present", "Reduces support friction"))
    else:
        details.append(_minus("No FAQ section", "-5% conversion (questions unanswered)"))

    if website.has_contact_info:
        score += 20
        details.append(_plus("Contact info accessible", "Trust signal to buyers"))
    else:
        details.append(_minus("Contact info hard to find", "-3% conversion, support friction"))

    if website.has_return_policy:
        score += 15
        details.append(_plus("Return policy visible", "Removes purchase friction"))
    else:
        details.append(_minus("Return policy unclear or missing", "-8% conversion"))

    # live chat is a bonus only; its absence is not reported
    if website.has_live_chat:
        score += 10
        details.append(_plus("Live chat/support detected", "+3-8% conversion"))

    return CategoryScore(
        category=Category.TRUST,
        score=min(score, MAX_SCORE),
        details=tuple(details),
        impact_summary="+8-18% conversion, +5-12% repeat purchases",
    )


def score_keywords(website: WebsiteSignals) -> CategoryScore:
    score = 50
    details: list[Detail] = []

    if len(website.title) > 30:
        score += 15
        details.append(_plus("Title tag present and descriptive", "Better CTR in search results"))
    else:
        details.append(_minus("Title tag too short or generic", "-3% CTR"))

    if len(website.description) > 100:
        score += 15
        details.append(_plus("Meta description complete", "Better search result display"))
    else:
        details.append(_minus("Meta description missing or too short", "-2% CTR"))

    if website.h1_count == 1:
        score += 15
        details.append(_plus("Proper heading hierarchy detected", "Better keyword relevance signal"))

    if website.has_schema:
        score += 10
        details.append(_plus("Schema markup aids keyword parsing", "+2-3% Google visibility"))
    else:
        details.append(_minus("No schema markup found", "-5% keyword visibility"))

    details.append(
        _minus(
            "Limited keyword analysis (need specific ASIN for Amazon keywords)",
            "Provide Amazon ASIN for keyword gap analysis",
        )
    )

    return CategoryScore(
        category=Category.KEYWORDS,
        score=min(score, MAX_SCORE),
        details=tuple(details),
        impact_summary="+8-15% visibility, +20-30% discoverability",
    )


def score_technical(website: WebsiteSignals) -> CategoryScore:
    score = 0
    details: list[Detail] = []
    speed = estimate_page_speed(website.page_size)

    if speed >= 80:
        score += 25
        details.append(_plus(f"Fast page load (estimated: {speed}/100)", "+5-10% conversion"))
    elif speed >= 60:
        score += 15
        details.append(_plus(f"Moderate page speed (estimated: {speed}/100)", "Acceptable"))
    else:
        score -= 10
        details.append(_minus(f"Slow page load (estimated: {speed}/100)", "-15% conversion, -5% SEO ranking"))

    if website.images > MANY_IMAGES:
        details.append(
            _minus(f"Many images ({website.images}) may slow page", "-3-5% conversion on slow networks")
        )

    if website.has_ssl:
        score += 15
        details.append(_plus("HTTPS/SSL enabled", "Security + ranking boost"))
    else:
        score -= 10
        details.append(_minus("Not using HTTPS", "-20% conversion, -10% SEO"))

    details.append(
        _minus(
            "Detailed metrics limited (Core Web Vitals require live testing)",
            "Use Google PageSpeed Insights for full analysis",
        )
    )

    return CategoryScore(
        category=Category.TECHNICAL,
        score=min(max(score, 0), MAX_SCORE),
        details=tuple(details),
        impact_summary="+5-15% conversion, +3-8% SEO ranking",
    )


@dataclass(frozen=True)
class Scorer:
    """Binds a scoring function to the signal record it reads."""

    category: Category
    score: Callable[..., CategoryScore]
    uses_listing: bool = False

    def __call__(self, website: WebsiteSignals, listing: ListingSignals | None) -> CategoryScore:
        result = self.score(listing if self.uses_listing else website)
        if result.category != self.category or result.max_score != MAX_SCORE or not result.details:
            raise ScoringError(f"Scorer for {self.category.value!r} returned an invalid result")
        return result


SCORERS: tuple[Scorer, ...] = (
    Scorer(Category.PRODUCT_DATA, score_product_data),
    Scorer(Category.REVIEW_AUTHORITY, score_review_authority, uses_listing=True),
    Scorer(Category.PRICING, score_pricing, uses_listing=True),
    Scorer(Category.TRUST, score_trust),
    Scorer(Category.KEYWORDS, score_keywords),
    Scorer(Category.TECHNICAL, score_technical),
)


def run_scorers(website: WebsiteSignals, listing: ListingSignals | None = None) -> list[CategoryScore]:
    """Run every scorer in category order."""
    return [scorer(website, listing) for scorer in SCORERS]
