import pytest

from models import ListingSignals, WebsiteSignals

SHOP_HTML = """<html><head><title>Shop</title></head>
<body><h1>Shop</h1><p>Nice things.</p></body></html>"""

LISTING_HTML = """<html><body>
<span id="productTitle"> Widget Pro </span>
<div id="acrPopover"><span class="a-icon-alt">4.6 out of 5 stars</span></div>
<span id="acrCustomerReviewCount">1,234 ratings</span>
<span class="a-price"><span class="a-price-whole">49.</span></span>
</body></html>"""


def make_website(**overrides) -> WebsiteSignals:
    """Signals for a page that scores nothing beyond the base values."""
    fields = {
        "title": "",
        "description": "",
        "h1_count": 0,
        "images": 0,
        "product_images": 0,
        "has_ssl": False,
        "has_about": False,
        "has_faq": False,
        "has_contact_info": False,
        "has_return_policy": False,
        "has_live_chat": False,
        "has_schema": False,
        "paragraphs": 0,
        "description_quality": 0,
        "page_size": 0,
        "domain": "example.com",
    }
    fields.update(overrides)
    return WebsiteSignals(**fields)


def make_listing(**overrides) -> ListingSignals:
    fields = {
        "product_id": "B000TEST01",
        "found": True,
        "title": "Widget",
        "rating": 4.2,
        "review_count": 120,
        "price": "79.99",
        "source_url": "https://www.amazon.com/dp/B000TEST01",
    }
    fields.update(overrides)
    return ListingSignals(**fields)


@pytest.fixture
def website() -> WebsiteSignals:
    return make_website()


@pytest.fixture
def listing() -> ListingSignals:
    return make_listing()
