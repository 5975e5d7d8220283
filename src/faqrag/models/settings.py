"""Application settings owned by the settings store."""

from pydantic import BaseModel, Field

DEFAULT_ALLOW_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:3100",
    "http://127.0.0.1:3100",
]


class AppSettings(BaseModel):
    """Admin-editable settings.

    The answer composer only reads ``model`` and ``max_tokens``; the rest
    belongs to the widget and the route layer.
    """

    model: str = "gpt-4o-mini"
    max_tokens: int = Field(default=512, ge=1)
    brand_color: str = "#2563EB"
    allow_origins: list[str] = Field(default_factory=lambda: list(DEFAULT_ALLOW_ORIGINS))
