"""Data models used across the backend.

Signal records come out of scraper.py, score records come out of scoring.py.
HTTP request/response shapes live in schemas.py.
All records are frozen: they are built once per audit and never mutated.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PRICE_UNAVAILABLE = "N/A"
MAX_SCORE = 100


class Record(BaseModel):
    """Frozen base model serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Category(str, Enum):
    """The six scoring dimensions, in evaluation order."""

    PRODUCT_DATA = "Product Data & Content Quality"
    REVIEW_AUTHORITY = "Review Authority & Trust"
    PRICING = "Pricing & Competitive Positioning"
    TRUST = "Trust, Credibility & Support"
    KEYWORDS = "Keyword Optimization & SEO"
    TECHNICAL = "Technical Performance & Site Health"


class WebsiteSignals(Record):
    """Facts extracted from the merchant homepage."""

    title: str = ""
    description: str = ""
    h1_count: int = Field(default=0, ge=0)
    images: int = Field(default=0, ge=0)
    product_images: int = Field(default=0, ge=0)
    has_ssl: bool = Field(default=False, alias="hasSSL")
    has_about: bool = False
    has_faq: bool = Field(default=False, alias="hasFAQ")
    has_contact_info: bool = False
    has_return_policy: bool = False
    has_live_chat: bool = False
    has_schema: bool = False
    paragraphs: int = Field(default=0, ge=0)
    description_quality: int = Field(default=0, ge=0)
    page_size: int = Field(default=0, ge=0)
    domain: str = "unknown"


class ListingSignals(Record):
    """Public facts from a marketplace listing page."""

    product_id: str = ""
    found: bool = False
    title: str = ""
    rating: float = 0.0
    review_count: int = Field(default=0, ge=0)
    price: str = PRICE_UNAVAILABLE
    source_url: str = ""
    error: str | None = None


class Detail(Record):
    """One finding backing a category score."""

    is_positive: bool
    text: str
    impact_text: str


class CategoryScore(Record):
    category: Category
    score: int
    max_score: int = MAX_SCORE
    details: tuple[Detail, ...]
    impact_summary: str
    listing_signals: ListingSignals | None = None
