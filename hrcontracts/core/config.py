# =====================================================
# FILE: hrcontracts/core/config.py
# Application Settings
# =====================================================

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from the environment or a .env file"""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "HR Contracts"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./hrcontracts.db"
    DB_ECHO: bool = False
    DB_POOL_PRE_PING: bool = True
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # Templates
    MAX_TEMPLATE_SIZE: int = 20 * 1024 * 1024  # 20MB
    DEFAULT_TEMPLATE_NAME: str = "Employment Contract Template"

    # Variable dictionary
    CONTRACT_DATE_FORMAT: str = "%d/%m/%Y"

    # Fixed-layout (PDF) rendering, in points
    PDF_PAGE_WIDTH: float = 595.27  # A4
    PDF_PAGE_HEIGHT: float = 841.89
    PDF_MARGIN: float = 50
    PDF_FONT_NAME: str = "Helvetica"
    PDF_FONT_SIZE: float = 11
    PDF_AVG_GLYPH_RATIO: float = 0.5
    PDF_LINE_PITCH_RATIO: float = 1.4
    PDF_MAX_LINES_PER_PAGE: int = 48
    PDF_MAX_PAGES: int = 1
    PDF_TRUNCATION_MARKER: str = "[... content truncated ...]"


settings = Settings()
