"""Page fetcher and markup extractors.

Fetches the merchant homepage (and optionally a marketplace listing) and
reduces the markup to flat signal records. Uses presence/absence substring
checks and element counts only; does NOT crawl subpages or execute scripts.
"""

import logging
import re
from typing import NamedTuple
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from config import FETCH_TIMEOUT_SECONDS, FETCH_USER_AGENT, LISTING_URL_TEMPLATE
from models import PRICE_UNAVAILABLE, ListingSignals, WebsiteSignals

log = logging.getLogger(__name__)

_REQUEST_HEADERS = {
    "User-Agent": FETCH_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

_PRODUCT_IMAGE_SELECTOR = "img[alt*='product'], img[alt*='Product'], img[class*='product']"
_DESCRIPTION_KEYWORDS = re.compile(r"feature|benefit|spec|material|size|color|quality")
_DECIMAL = re.compile(r"(\d+\.\d+)")
_INTEGER = re.compile(r"(\d+)")
_PRICE = re.compile(r"\d+(\.\d*)?")
_HTTP_SCHEME = re.compile(r"https?://", re.IGNORECASE)


class FetchFailure(RuntimeError):
    """Network error, timeout or non-2xx response while fetching a page."""


class FetchedPage(NamedTuple):
    text: str
    size: int  # bytes as received, before decoding


def normalize_url(raw_url: str) -> str:
    """Prefix https:// unless the URL already starts with http:// or https://."""
    url = (raw_url or "").strip()
    if not _HTTP_SCHEME.match(url):
        url = f"https://{url}"
    return url


def extract_domain(url: str) -> str:
    try:
        host = urlparse(url).hostname
    except ValueError:
        return "unknown"
    if not host:
        return "unknown"
    return host.replace("www.", "", 1)


def fetch_page(url: str, timeout: float = FETCH_TIMEOUT_SECONDS) -> FetchedPage:
    """Return the page markup and its raw size, or raise FetchFailure. No retries."""
    try:
        response = requests.get(url, timeout=timeout, headers=_REQUEST_HEADERS)
        response.raise_for_status()
    except requests.RequestException as e:
        log.error("Error fetching %s: %s", url, e)
        raise FetchFailure(f"Failed to fetch URL: {e}") from e

    response.encoding = response.apparent_encoding or "utf-8"
    return FetchedPage(response.text, len(response.content))


def extract_website_signals(html: str, url: str, page_size: int | None = None) -> WebsiteSignals:
    """
    Reduce homepage markup to a WebsiteSignals record.
    page_size defaults to the UTF-8 length of `html` when the raw size is unknown.
    """
    soup = BeautifulSoup(html, "html.parser")
    lowered = html.lower()

    title = "".join(tag.get_text() for tag in soup.find_all("title")) or "No title found"

    description = ""
    meta_desc_tag = soup.find("meta", attrs={"name": "description"})
    if meta_desc_tag and meta_desc_tag.get("content"):
        description = meta_desc_tag["content"]

    paragraphs = soup.find_all("p")
    paragraph_text = "".join(p.get_text() for p in paragraphs).lower()

    return WebsiteSignals(
        title=title,
        description=description,
        h1_count=len(soup.find_all("h1")),
        images=len(soup.find_all("img")),
        product_images=len(soup.select(_PRODUCT_IMAGE_SELECTOR)),
        has_ssl=url.lower().startswith("https"),
        has_about="about us" in lowered,
        has_faq="faq" in lowered,
        has_contact_info="contact" in lowered or "support" in lowered,
        has_return_policy="return" in lowered or "refund" in lowered,
        has_live_chat="tawk" in html or "drift" in html,
        has_schema="schema.org" in html or "@context" in html,
        paragraphs=len(paragraphs),
        description_quality=len(_DESCRIPTION_KEYWORDS.findall(paragraph_text)),
        page_size=len(html.encode("utf-8")) if page_size is None else page_size,
        domain=extract_domain(url),
    )


def scrape_website(url: str) -> WebsiteSignals:
    """Fetch and extract the merchant homepage. Fetch failures propagate."""
    page = fetch_page(url)
    return extract_website_signals(page.text, url, page_size=page.size)


def _first_text(soup: BeautifulSoup, *selectors: str) -> str:
    for selector in selectors:
        tag = soup.select_one(selector)
        if tag is not None:
            text = tag.get_text(strip=True)
            if text:
                return text
    return ""


def _normalize_price(raw: str) -> str:
    cleaned = re.sub(r"[$,\s]", "", raw or "")
    return cleaned if _PRICE.fullmatch(cleaned) else PRICE_UNAVAILABLE


def extract_listing_signals(html: str, product_id: str, url: str) -> ListingSignals:
    """Reduce a marketplace product page to a ListingSignals record."""
    soup = BeautifulSoup(html, "html.parser")

    title = _first_text(soup, "span.a-size-large.product-title-wordbreak", "#productTitle", "h1 span") or "Unknown"

    rating = 0.0
    rating_match = _DECIMAL.search(_first_text(soup, "#acrPopover span.a-icon-alt", "span.a-icon-alt"))
    if rating_match:
        rating = float(rating_match.group(1))

    review_count = 0
    reviews_text = _first_text(soup, "span#acrCustomerReviewCount").replace(",", "")
    reviews_match = _INTEGER.search(reviews_text)
    if reviews_match:
        review_count = int(reviews_match.group(1))

    return ListingSignals(
        product_id=product_id,
        found=True,
        title=title,
        rating=rating,
        review_count=review_count,
        price=_normalize_price(_first_text(soup, "span.a-price-whole")),
        source_url=url,
    )


def scrape_listing(product_id: str) -> ListingSignals:
    """
    Fetch and extract a marketplace listing.
    On any failure, returns a found=False record instead of raising.
    """
    url = LISTING_URL_TEMPLATE.format(asin=product_id)
    try:
        return extract_listing_signals(fetch_page(url).text, product_id, url)
    except Exception as e:
        log.warning("Listing %s unavailable: %s", product_id, e)
        return ListingSignals(product_id=product_id, found=False, source_url=url, error=str(e))
