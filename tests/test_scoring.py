import pytest

from conftest import make_listing, make_website
from models import MAX_SCORE, Category
from scoring import (
    SCORERS,
    ScoringError,
    Scorer,
    estimate_page_speed,
    run_scorers,
    score_keywords,
    score_pricing,
    score_product_data,
    score_review_authority,
    score_technical,
    score_trust,
)

KB = 1024


def _texts(result):
    return [d.text for d in result.details]


# --- product data ---------------------------------------------------------


def test_product_data_best_case():
    site = make_website(images=6, product_images=3, description_quality=51, has_schema=True, h1_count=1)
    result = score_product_data(site)
    assert result.score == 80
    assert result.max_score == MAX_SCORE
    assert all(d.is_positive for d in result.details)
    assert len(result.details) == 5


def test_product_data_penalties_can_go_negative():
    result = score_product_data(make_website())
    # 0 images, -5 product images, -10 descriptions, no schema, no H1
    assert result.score == -15
    assert len(result.details) == 4
    assert not any(d.is_positive for d in result.details)
    assert _texts(result)[0] == "Too few images: 0"


@pytest.mark.parametrize(
    "images, points, text",
    [
        (2, 0, "Too few images: 2"),
        (3, 10, "Only 3 images (target: 6+)"),
        (5, 10, "Only 5 images (target: 6+)"),
        (6, 20, "Good image count: 6 images"),
    ],
)
def test_product_data_image_brackets(images, points, text):
    result = score_product_data(make_website(images=images))
    assert result.score == points - 15
    assert result.details[0].text == text


@pytest.mark.parametrize(
    "quality, points, positive",
    [
        (20, -10, False),
        (21, 10, False),
        (50, 10, False),
        (51, 20, True),
    ],
)
def test_product_data_description_brackets(quality, points, positive):
    result = score_product_data(make_website(description_quality=quality))
    assert result.score == points - 5
    assert result.details[2].is_positive is positive


def test_product_data_multiple_h1_is_penalized():
    result = score_product_data(make_website(h1_count=2))
    assert result.score == -20
    assert result.details[-1].text == "Multiple H1 tags (2)"
    assert result.details[-1].impact_text == "Confuses search engines"


def test_product_data_is_capped_at_100():
    # the rules top out at 80, so the cap is never reached with valid signals
    site = make_website(images=60, product_images=60, description_quality=500, has_schema=True, h1_count=1)
    assert score_product_data(site).score == 80


# --- review authority -----------------------------------------------------


@pytest.mark.parametrize("listing", [None, make_listing(found=False)])
def test_review_authority_without_listing(listing):
    result = score_review_authority(listing)
    assert result.score == 0
    assert len(result.details) == 1
    assert result.details[0].is_positive is False
    assert result.details[0].text == "ASIN not found or not provided"
    assert result.impact_summary.startswith("N/A")
    assert result.listing_signals is None


@pytest.mark.parametrize(
    "rating, reviews, expected_score, expected_details",
    [
        (4.5, 200, 100, 2),
        (4.0, 50, 80, 2),
        (3.5, 10, 60, 3),  # plus low-velocity detail
        (3.0, 0, 50, 2),  # zero reviews: no velocity detail
        (4.9, 19, 80, 3),
        (4.9, 20, 80, 2),
    ],
)
def test_review_authority_brackets(rating, reviews, expected_score, expected_details):
    result = score_review_authority(make_listing(rating=rating, review_count=reviews))
    assert result.score == expected_score
    assert len(result.details) == expected_details


def test_review_authority_texts_and_listing_copy():
    listing = make_listing(rating=4.0, review_count=5)
    result = score_review_authority(listing)
    assert _texts(result) == [
        "Good rating: 4/5 stars",
        "Very few reviews: 5",
        "Low review velocity (need more reviews)",
    ]
    assert result.details[1].impact_text == "-20% visibility, low trust"
    assert result.listing_signals == listing


# --- pricing --------------------------------------------------------------


@pytest.mark.parametrize(
    "listing",
    [None, make_listing(found=False), make_listing(price="N/A"), make_listing(price="See options")],
)
def test_pricing_unavailable(listing):
    result = score_pricing(listing)
    assert result.score == 50
    assert len(result.details) == 1
    assert result.details[0].text == "Price data unavailable"
    assert result.impact_summary == "Unknown"
    assert result.listing_signals is None


@pytest.mark.parametrize(
    "price, expected_score, text",
    [
        ("19.99", 75, "Budget-friendly price: $19.99"),
        ("49.", 75, "Budget-friendly price: $49"),
        ("50", 80, "Mid-range price: $50"),
        ("199.99", 80, "Mid-range price: $199.99"),
        ("200", 70, "Premium price: $200"),
        ("0", 70, "Premium price: $0"),
    ],
)
def test_pricing_bands(price, expected_score, text):
    result = score_pricing(make_listing(price=price))
    assert result.score == expected_score
    assert result.details[0].is_positive
    assert result.details[0].text == text
    assert result.details[-1].is_positive is False
    assert "competitor data" in result.details[-1].text
    assert len(result.details) == 2


# --- trust ----------------------------------------------------------------


def test_trust_all_signals():
    site = make_website(
        has_ssl=True,
        has_about=True,
        has_faq=True,
        has_contact_info=True,
        has_return_policy=True,
        has_live_chat=True,
    )
    result = score_trust(site)
    assert result.score == 100
    assert len(result.details) == 6
    assert result.details[-1].text == "Live chat/support detected"


def test_trust_missing_live_chat_is_not_reported():
    result = score_trust(make_website())
    assert result.score == 0
    assert len(result.details) == 5
    assert not any("chat" in text.lower() for text in _texts(result))


@pytest.mark.parametrize(
    "flag, points",
    [
        ("has_ssl", 20),
        ("has_about", 20),
        ("has_faq", 15),
        ("has_contact_info", 20),
        ("has_return_policy", 15),
        ("has_live_chat", 10),
    ],
)
def test_trust_flag_weights(flag, points):
    assert score_trust(make_website(**{flag: True})).score == points


# --- keywords -------------------------------------------------------------


def test_keywords_baseline():
    result = score_keywords(make_website())
    assert result.score == 50
    assert [d.is_positive for d in result.details] == [False, False, False, False]
    assert "ASIN" in result.details[-1].text


def test_keywords_capped_at_100():
    site = make_website(title="t" * 31, description="d" * 101, h1_count=1, has_schema=True)
    result = score_keywords(site)
    assert result.score == 100
    assert len(result.details) == 5


def test_keywords_length_thresholds_are_strict():
    site = make_website(title="t" * 30, description="d" * 100)
    assert score_keywords(site).score == 50


@pytest.mark.parametrize("h1_count", [0, 2, 5])
def test_keywords_ignores_missing_or_multiple_h1(h1_count):
    result = score_keywords(make_website(h1_count=h1_count))
    assert result.score == 50
    assert len(result.details) == 4


# --- technical ------------------------------------------------------------


@pytest.mark.parametrize(
    "page_size, speed",
    [
        (0, 85),
        (299 * KB, 85),
        (300 * KB, 75),
        (499 * KB, 75),
        (500 * KB, 65),
        (799 * KB, 65),
        (800 * KB, 55),
        (5000 * KB, 55),
    ],
)
def test_estimate_page_speed_buckets(page_size, speed):
    assert estimate_page_speed(page_size) == speed


def test_technical_fast_secure_page():
    result = score_technical(make_website(page_size=299 * KB, has_ssl=True))
    assert result.score == 40
    assert _texts(result)[0] == "Fast page load (estimated: 85/100)"
    assert len(result.details) == 3


def test_technical_threshold_moves_to_slower_bucket():
    result = score_technical(make_website(page_size=300 * KB, has_ssl=True))
    assert result.score == 30
    assert _texts(result)[0] == "Moderate page speed (estimated: 75/100)"


def test_technical_floors_at_zero():
    result = score_technical(make_website(page_size=900 * KB, has_ssl=False))
    # -10 slow, -10 no HTTPS
    assert result.score == 0
    assert result.details[0].is_positive is False


def test_technical_many_images_adds_detail_without_score_change():
    few = score_technical(make_website(images=15, has_ssl=True))
    many = score_technical(make_website(images=16, has_ssl=True))
    assert few.score == many.score
    assert len(many.details) == len(few.details) + 1
    assert many.details[1].text == "Many images (16) may slow page"


# --- scorer list ----------------------------------------------------------


def test_run_scorers_order_and_contract(website, listing):
    results = run_scorers(website, listing)
    assert [r.category for r in results] == list(Category)
    for result in results:
        assert result.max_score == 100
        assert result.details
        assert result.score <= 100


def test_run_scorers_is_idempotent(listing):
    site = make_website(images=4, h1_count=2, has_ssl=True, page_size=400 * KB)
    first = run_scorers(site, listing)
    second = run_scorers(site, listing)
    assert first == second
    assert [r.model_dump_json() for r in first] == [r.model_dump_json() for r in second]


def test_scorer_rejects_invalid_result(website):
    bogus = Scorer(Category.TRUST, score_keywords)
    with pytest.raises(ScoringError):
        bogus(website, None)


def test_scorers_cover_every_category_once():
    assert [s.category for s in SCORERS] == list(Category)
