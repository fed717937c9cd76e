"""E-commerce audit API – FastAPI app and endpoints."""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aggregator import aggregate
from config import CORS_ALLOW_ORIGINS, HOST, PORT, configure_logging
from report import build_report
from schemas import AUDIT_FAILED_HINT, AuditReport, AuditRequest, ErrorResponse, HealthResponse
from scoring import run_scorers
from scraper import normalize_url, scrape_listing, scrape_website

configure_logging()
log = logging.getLogger(__name__)

app = FastAPI(
    title="E-commerce Audit API",
    description="Product visibility and conversion audit",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or non-object JSON bodies get the same 400 shape as a missing URL."""
    log.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    return _error(400, "Website URL required")


def run_audit(website_url: str, amazon_asin: str = "") -> AuditReport:
    """
    Pipeline: scrape website (+ listing) -> score six categories -> aggregate -> report.
    Website fetch failures propagate; listing failures degrade to found=False.
    """
    url = normalize_url(website_url)
    log.info("Starting audit for: %s", url)

    # 1. Scrape website
    website = scrape_website(url)
    log.info("Website data scraped for %s", website.domain)

    # 2. Scrape listing if an ASIN was provided
    listing = None
    if amazon_asin:
        listing = scrape_listing(amazon_asin)
        log.info("Listing data scraped for %s (found=%s)", amazon_asin, listing.found)

    # 3. Score and aggregate
    scores = run_scorers(website, listing)
    summary = aggregate(scores)
    log.info("Audit complete for %s: overall score %d", url, summary.overall_score)

    return build_report(
        website_url=url,
        amazon_asin=amazon_asin,
        website=website,
        scores=scores,
        summary=summary,
    )


@app.post(
    "/audit",
    response_model=AuditReport,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@app.post("/api/audit", response_model=AuditReport, include_in_schema=False)
def audit(body: AuditRequest | None = None):
    """Audit a merchant website and optional marketplace listing."""
    if body is None or not body.website_url:
        return _error(400, "Website URL required")

    try:
        return run_audit(body.website_url, body.amazon_asin)
    except Exception as e:
        log.exception("Audit error: %s", e)
        return _error(500, str(e), AUDIT_FAILED_HINT)


@app.get("/health", response_model=HealthResponse)
@app.get("/api/health", response_model=HealthResponse, include_in_schema=False)
def health() -> HealthResponse:
    """Health check for deployment."""
    return HealthResponse()


def run() -> None:
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
