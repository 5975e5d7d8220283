"""Document data model."""

from pydantic import BaseModel


class Document(BaseModel):
    """A fetched page or PDF, before segmentation."""

    url: str
    title: str
    text: str
