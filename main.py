"""FastAPI application - main entry point."""
from fastapi import FastAPI, Depends, HTTPException, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import List, Optional
import logging

from config import settings
from exceptions import ContentNotFoundError, FetchError, ParseError, ScraperError
from extractor import ChapterExtractor
from fetcher import PageFetcher
from schemas import ErrorResponse, ScrapeRequest, ScrapedChapter, SuggestRequest
from suggester import SelectorSuggester

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Novel Reader API",
    description="Selector suggestion and chapter scraping for the web-novel reader",
    version="1.0.0",
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def get_fetcher() -> PageFetcher:
    """Fetch capability used when the caller does not send HTML."""
    return PageFetcher(settings)


def _status_for(error: ScraperError) -> int:
    if isinstance(error, ContentNotFoundError):
        return 404
    if isinstance(error, ParseError):
        return 422
    if isinstance(error, FetchError):
        return 502
    return 500


def _require(name: str, value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise HTTPException(status_code=400, detail=f"{name.capitalize()} parameter is required")
    return value.strip()


# ============================================================================
# Error Handlers
# ============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error as {"error": message}."""
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors."""
    fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in exc.errors())
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {fields}"})


# ============================================================================
# Core
# ============================================================================

async def _load_html(url: str, html: Optional[str], fetcher: PageFetcher) -> str:
    if html is not None:
        return html
    return await fetcher.fetch(url)


async def _suggest(url: str, html: Optional[str], fetcher: PageFetcher, response: Response) -> List[str]:
    try:
        page = await _load_html(url, html, fetcher)
        suggestions = await run_in_threadpool(SelectorSuggester(settings).suggest, page, url)
    except ScraperError as e:
        logger.error(f"Suggest failed for URL: {url}: {e}")
        raise HTTPException(
            status_code=_status_for(e),
            detail=f"Failed to get suggestions for {url}. Reason: {e}",
        )

    response.headers["Cache-Control"] = settings.cache_control
    return suggestions


async def _scrape(url: str, selector: str, html: Optional[str], fetcher: PageFetcher, response: Response) -> ScrapedChapter:
    try:
        page = await _load_html(url, html, fetcher)
        chapter = await run_in_threadpool(ChapterExtractor(settings).extract, page, selector, url)
    except ScraperError as e:
        logger.error(f"Scraping failed for URL: {url}: {e}")
        raise HTTPException(
            status_code=_status_for(e),
            detail=f"Failed to scrape chapter content from {url}. Reason: {e}",
        )

    response.headers["Cache-Control"] = settings.cache_control
    return chapter


# ============================================================================
# Suggest Endpoints
# ============================================================================

@app.get("/api/suggest", response_model=List[str], responses=ERROR_RESPONSES, tags=["Suggest"])
async def suggest_selectors(
    response: Response,
    url: Optional[str] = Query(None, description="Chapter page URL"),
    fetcher: PageFetcher = Depends(get_fetcher),
):
    """
    Suggest CSS selectors for the chapter content of a page.

    Fetches the page, then returns the selectors most likely first.
    """
    url = _require("url", url)
    return await _suggest(url, None, fetcher, response)


@app.post("/api/suggest", response_model=List[str], responses=ERROR_RESPONSES, tags=["Suggest"])
async def suggest_selectors_for_html(
    request: SuggestRequest,
    response: Response,
    fetcher: PageFetcher = Depends(get_fetcher),
):
    """Suggest selectors; uses the posted HTML when present."""
    url = _require("url", request.url)
    return await _suggest(url, request.html, fetcher, response)


# ============================================================================
# Scrape Endpoints
# ============================================================================

@app.get("/api/scrape", response_model=ScrapedChapter, responses=ERROR_RESPONSES, tags=["Scrape"])
async def scrape_chapter(
    response: Response,
    url: Optional[str] = Query(None, description="Chapter page URL"),
    selector: Optional[str] = Query(None, description="CSS selector of the content"),
    fetcher: PageFetcher = Depends(get_fetcher),
):
    """
    Scrape one chapter.

    Returns the cleaned content, title, chapter number and the next and
    previous chapter URLs.
    """
    url = _require("url", url)
    selector = _require("selector", selector)
    return await _scrape(url, selector, None, fetcher, response)


@app.post("/api/scrape", response_model=ScrapedChapter, responses=ERROR_RESPONSES, tags=["Scrape"])
async def scrape_chapter_from_html(
    request: ScrapeRequest,
    response: Response,
    fetcher: PageFetcher = Depends(get_fetcher),
):
    """Scrape one chapter; uses the posted HTML when present."""
    url = _require("url", request.url)
    selector = _require("selector", request.selector)
    return await _scrape(url, selector, request.html, fetcher, response)


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health", tags=["System"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "novel-reader"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
