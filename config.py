from decimal import Decimal
from pathlib import Path

from pydantic import PrivateAttr
from pydantic_settings import BaseSettings


BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    app_name: str = "Application Document API"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./application_documents.db"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Values surfaced verbatim on every generated document
    support_email: str = "support@example.com"
    signature: str = "The Applications Team"
    tax_rate: Decimal = Decimal("0.15")

    # Template registry: document kind name -> path relative to the base uri
    template_base_uri: str = f"{BASE_DIR / 'templates'}/"
    template_paths: dict[str, str] = {
        "PendingApplication": "/pending_application.html",
        "ActivatedApplication": "/activated_application.html",
        "InReviewApplication": "/in_review_application.html",
    }
    pdf_header_html: str = "<h2>Application Services</h2>"
    font_path: Path = BASE_DIR / "fonts" / "DejaVuSans.ttf"
    bold_font_path: Path = BASE_DIR / "fonts" / "DejaVuSans-Bold.ttf"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    _is_sqlite: bool = PrivateAttr(default=False)

    def model_post_init(self, __context: object) -> None:
        _scheme = self.database_url.split(":")[0].lower()
        object.__setattr__(self, "_is_sqlite", "sqlite" in _scheme)

    @property
    def is_sqlite(self) -> bool:
        return self._is_sqlite


settings = Settings()
