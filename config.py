"""Application configuration."""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings."""

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = True
    cache_control: str = "s-maxage=10, stale-while-revalidate=59"

    # Fetching
    fetch_timeout: float = 45.0
    fetch_retries: int = 3
    retry_http_codes: List[int] = [500, 502, 503, 504, 522, 524, 408, 429]
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/116.0.0.0 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.9,zh-CN;q=0.8,ko;q=0.7"

    # Selector suggestion
    suggest_max_results: int = 7
    suggest_score_threshold: float = 80
    suggest_min_direct_text: int = 50
    suggest_class_max_matches: int = 5
    suggest_broad_selector_limit: int = 10
    suggest_strong_score: float = 5000
    suggest_strong_selector_limit: int = 20

    # Chapter extraction
    extract_min_p_tags: int = 3
    extract_min_text_length: int = 200
    extract_min_paragraphs: int = 3
    extract_min_paragraph_chars: int = 1
    extra_junk_phrases: List[str] = []

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
