# DEPENDENCIES
from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application-wide settings: primary configuration source
    """
    # Application Info
    APP_NAME                : str            = "Lease Risk Analyzer"
    APP_VERSION             : str            = "1.0.0"
    API_PREFIX              : str            = "/api/v1/"

    # Server Configuration
    HOST                    : str            = "0.0.0.0"
    PORT                    : int            = 8000
    RELOAD                  : bool           = True
    WORKERS                 : int            = 1

    # CORS Settings
    CORS_ORIGINS            : list           = ["http://localhost:3000", "http://localhost:8000", "http://127.0.0.1:8000"]
    CORS_ALLOW_CREDENTIALS  : bool           = True
    CORS_ALLOW_METHODS      : list           = ["*"]
    CORS_ALLOW_HEADERS      : list           = ["*"]

    # File Upload Settings
    MAX_UPLOAD_SIZE         : int            = 10 * 1024 * 1024  # 10 MB
    ALLOWED_EXTENSIONS      : list           = [".pdf", ".docx", ".txt"]

    # Rule Library
    LEGAL_REFERENCES_DIR    : Path           = Path(__file__).parent / "legal_references"

    # Analysis Settings
    CHUNK_MAX_SIZE          : int            = 500
    CHUNK_OVERLAP           : int            = 100
    MIN_MATCH_SCORE         : float          = 10
    ENABLE_PATTERN_FALLBACK : bool           = False
    MAX_LEASE_LENGTH        : int            = 500000 # Maximum characters (500KB text)

    # Logging Settings
    LOG_LEVEL               : str            = "INFO"
    LOG_DIR                 : Path           = Path("logs")

    # PDF Report Settings
    PDF_FONT_SIZE           : int            = 10
    PDF_MARGIN              : float          = 0.75 # inches


    class Config:
        env_file          = ".env"
        env_file_encoding = "utf-8"
        case_sensitive    = True


    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        if self.LOG_DIR:
            self.LOG_DIR.mkdir(parents = True, exist_ok = True)


# Global settings instance
settings = Settings()
