"""Configuration management for the chat service"""

import os
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()

BACKEND_ROOT = Path(__file__).resolve().parents[3]


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"HUDDLE_{name}", default)


class Settings(BaseModel):
    """Application settings, read from ``HUDDLE_*`` environment variables."""

    # Service configuration
    service_name: str = "Huddle Chat Service"
    service_version: str = "1.0.0"
    environment: str = Field(default_factory=lambda: _env("ENVIRONMENT", "development"))
    host: str = Field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(_env("PORT", os.getenv("PORT", "3000"))))

    # Socket.IO
    cors_origins: str = Field(default_factory=lambda: _env("CORS_ORIGINS", "*"))
    ping_interval: int = Field(default_factory=lambda: int(_env("PING_INTERVAL", "25")))
    ping_timeout: int = Field(default_factory=lambda: int(_env("PING_TIMEOUT", "30")))

    # Static chat page
    index_file: str = Field(
        default_factory=lambda: _env("INDEX_FILE", str(BACKEND_ROOT / "static" / "index.html"))
    )

    # Logging
    log_level: str = Field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = Field(default_factory=lambda: _env("LOG_FILE"))

    def cors_allowed_origins(self) -> Union[str, List[str]]:
        """Socket.IO accepts ``"*"`` or an explicit list of origins."""
        if self.cors_origins.strip() == "*":
            return "*"
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Create global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance"""
    return settings
