# src/refrag/models/page.py
"""Page data model."""

from pydantic import BaseModel, ConfigDict, Field


class Page(BaseModel):
    """The extracted text of one PDF page."""

    model_config = ConfigDict(frozen=True)

    text: str
    page_number: int = Field(ge=1)  # 1-based, contiguous within a document
    source: str
