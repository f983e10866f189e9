"""Pydantic schemas for API request/response validation."""
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, Literal


class CamelModel(BaseModel):
    """Serialises field names in camelCase, accepts either form on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Chapter Schemas
class ScrapedChapter(CamelModel):
    """Structured chapter extracted from a page."""
    title: str = Field("Unknown Chapter", description="Best-guess chapter title")
    chapter_number: Optional[int] = Field(None, gt=0, description="Sequential chapter index")
    content: str = Field(..., min_length=1, description="Clean prose, paragraphs separated by a blank line")
    next_url: Optional[str] = Field(None, description="Absolute URL of the next chapter")
    prev_url: Optional[str] = Field(None, description="Absolute URL of the previous chapter")

    model_config = ConfigDict(frozen=True)


# Request Schemas
class SuggestRequest(BaseModel):
    """Ask for content selector suggestions."""
    url: str = Field(..., description="Chapter page URL")
    html: Optional[str] = Field(None, description="Already fetched HTML; fetched from url when omitted")


class ScrapeRequest(BaseModel):
    """Ask for a chapter to be scraped with a given selector."""
    url: str = Field(..., description="Chapter page URL")
    selector: str = Field(..., description="CSS selector of the content container")
    html: Optional[str] = Field(None, description="Already fetched HTML; fetched from url when omitted")


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""
    error: str


# Novel Schemas
class NovelConfig(CamelModel):
    """
    Per-novel reader configuration kept by the client.

    The backend only reads ``url`` and ``selector`` from it.
    """
    id: str
    title: str
    url: str
    selector: str
    source_language: Literal["chinese", "korean"] = "chinese"
    custom_glossary: str = ""
    ai_provider: Literal["gemini", "groq", "gemini-flash"] = "gemini"
    use_proxy: bool = False
