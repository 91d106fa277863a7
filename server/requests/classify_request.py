"""ClassifyRequest model."""

from pydantic import BaseModel


class ClassifyRequest(BaseModel):
    command: str
