"""
Wire shapes shared by the REST and WebSocket log endpoints.
"""

from typing import Optional

from pydantic import BaseModel, field_validator


class LogLineModel(BaseModel):
    header: Optional[str] = None
    line: Optional[str] = None
    timestamp: Optional[str] = None


class LogPageModel(BaseModel):
    lines: list[LogLineModel] = []
    nextToken: Optional[str] = None

    @field_validator("lines", mode="before")
    @classmethod
    def null_lines_to_empty(cls, value):
        # The provider marshals an empty page as "lines": null
        return [] if value is None else value

    def to_wire(self) -> dict:
        """JSON body with absent fields left out (an empty nextToken means "last page")."""
        return self.model_dump(exclude_none=True)
