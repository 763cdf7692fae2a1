from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./tickets.db"

    # Ticket artifacts
    ticket_template_path: str = "ticket.png"
    qr_width: int = 500
    qr_border: int = 1
    qr_error_correction: str = "M"  # L, M, Q or H

    # Issuance
    issue_rate_limit: str = "30/minute"
    archive_filename: str = "tickets.zip"

    # Branding
    org_name: str = "Gala"

    # CORS
    cors_origins: str = ""  # Comma-separated allowed origins (empty = allow all)

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
