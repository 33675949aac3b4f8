"""
Configuration management for the Structured Data Scraper.
Handles environment variables and application settings.
"""
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""
    
    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")  # json or console
    
    # Request settings
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))
    
    # Generative fallback (optional - heuristic tier is used without a key)
    # Loaded from environment variables, NEVER hardcoded
    CLAUDE_API_KEY: Optional[str] = os.getenv("CLAUDE_API_KEY")
    CLAUDE_MODEL: str = os.getenv("CLAUDE_MODEL", "claude-3-5-haiku-20241022")
    GENERATION_TIMEOUT: float = float(os.getenv("GENERATION_TIMEOUT", "60"))
    GENERATION_MAX_TOKENS: int = int(os.getenv("GENERATION_MAX_TOKENS", "2048"))
    
    # Content limits
    CONTENT_LIMIT: int = int(os.getenv("CONTENT_LIMIT", "5000"))
    PROMPT_CONTENT_LIMIT: int = int(os.getenv("PROMPT_CONTENT_LIMIT", "2000"))
    
    # Output
    OUTPUT_DIR: str = os.getenv("OUTPUT_DIR", "./output")
    
    @classmethod
    def is_generation_configured(cls) -> bool:
        """Check if the generative fallback has credentials."""
        return bool(cls.CLAUDE_API_KEY)


config = Config()
