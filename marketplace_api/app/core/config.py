"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  A
``.env`` file in the working directory, if present, is loaded before
the defaults are computed so that local deployments can keep their
secrets (for example ``RESEND_API_KEY``) out of the shell.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Marketplace API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None
    log_format: str = os.getenv("LOG_FORMAT", "%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    # Per-request access lines from uvicorn; set ACCESS_LOG=false to silence them.
    access_log: bool = os.getenv("ACCESS_LOG", "true").lower() in {"1", "true", "yes"}
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))

    # Path of the JSON document holding the listings collection.  A
    # relative path is resolved against the project root by
    # ``get_listings_path``.
    listings_file: str = os.getenv("LISTINGS_FILE", "listings.json")

    # What to do when the listings document is missing or corrupt:
    # ``raise`` surfaces a 500 to the caller, ``empty`` logs the problem
    # and serves an empty collection instead.
    store_read_failure: str = os.getenv("STORE_READ_FAILURE", "raise")

    # Comma‑separated list of allowed CORS origins.  ``*`` allows all.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Optional directory of static files served under ``/``.
    static_dir: Optional[str] = os.getenv("STATIC_DIR") or None

    # Transactional email relay used by the contact form.
    resend_api_key: str = os.getenv("RESEND_API_KEY", "")
    resend_api_url: str = os.getenv("RESEND_API_URL", "https://api.resend.com/emails")
    contact_from: str = os.getenv("CONTACT_FROM", "onboarding@resend.dev")
    contact_to: str = os.getenv("CONTACT_TO", "samanthasu2028@u.northwestern.edu")
    relay_timeout: float = float(os.getenv("RELAY_TIMEOUT", "10"))

    def get_listings_path(self) -> Path:
        """Compute the absolute path of the listings document.

        If ``listings_file`` is absolute it is used directly, otherwise
        it is resolved relative to the project root (the directory
        containing the ``marketplace_api`` package).
        """
        path = Path(self.listings_file)
        if path.is_absolute():
            return path
        base_dir = Path(__file__).resolve().parent.parent.parent.parent
        return (base_dir / path).resolve()

    def get_cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
