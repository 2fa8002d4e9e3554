"""
Session models — shapes returned by the OpenCode `/session` routes.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionTime(BaseModel):
    created: int = 0
    updated: int = 0


class SessionInfo(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    title: str = ""
    directory: Optional[str] = None
    version: Optional[str] = None
    project_id: Optional[str] = Field(default=None, alias="projectID")
    time: SessionTime = Field(default_factory=SessionTime)

    @property
    def updated_at(self) -> int:
        """Last activity, epoch milliseconds."""
        return self.time.updated

    def updated_display(self) -> str:
        if not self.time.updated:
            return ""
        return datetime.fromtimestamp(self.time.updated / 1000).strftime("%Y-%m-%d %H:%M:%S")
