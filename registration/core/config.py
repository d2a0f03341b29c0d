# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, read once at startup.
Handlers never touch os.environ; they receive collaborators built from
this object in core/dependencies.py.
"""

import os


def normalize_private_key(raw: str) -> str:
    """
    Undo the usual damage done to a PEM key pasted into a .env file:
    literal "\\n" sequences and a pair of wrapping quotes.
    """
    key = raw.replace("\\n", "\n")
    if len(key) >= 2 and key.startswith('"') and key.endswith('"'):
        key = key[1:-1]
    return key


def _split_csv(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self) -> None:
        self.SERVICE_NAME: str = os.getenv("SERVICE_NAME", "registration-service")
        self.SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.2.0")
        self.SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "5001"))
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        self.CORS_ORIGINS: list[str] = _split_csv(os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3001,"
            "https://tharbiya-registration-form-frontend.onrender.com,"
            "https://tharbiya.wisdommlpe.site",
        ))

        # Row store
        self.ROW_STORE_BACKEND: str = os.getenv("ROW_STORE_BACKEND", "sheets").lower()
        self.SEED_DEMO_DATA: bool = os.getenv("SEED_DEMO_DATA", "false").lower() == "true"
        self.SPREADSHEET_ID: str = os.getenv("SPREADSHEET_ID", "")
        self.SHEET_NAME: str = os.getenv("SHEET_NAME", "ExecutiveList")
        self.GOOGLE_AUTH_EMAIL: str = os.getenv("GOOGLE_AUTH_EMAIL", "")
        self.GOOGLE_AUTH_PRIVATE_KEY: str = normalize_private_key(
            os.getenv("GOOGLE_AUTH_PRIVATE_KEY", "")
        )
        self.GOOGLE_TOKEN_URI: str = os.getenv(
            "GOOGLE_TOKEN_URI", "https://oauth2.googleapis.com/token"
        )

        # Admin auth
        self.ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME") or os.getenv("ADMIN_EMAIL", "")
        self.ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")
        self.JWT_SECRET: str = os.getenv("JWT_SECRET", "")
        self.JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
        self.JWT_EXPIRES_HOURS: int = int(os.getenv("JWT_EXPIRES_HOURS", "24"))

    @property
    def sheets_configured(self) -> bool:
        return bool(
            self.SPREADSHEET_ID
            and self.GOOGLE_AUTH_EMAIL
            and self.GOOGLE_AUTH_PRIVATE_KEY
        )


settings = Settings()
