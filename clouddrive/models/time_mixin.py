from datetime import datetime

from pydantic import BaseModel, Field


class TimeMixin(BaseModel):
    """Both stamps are set on insert, so new entries sort as recently updated"""
    created_at: datetime = Field(default_factory=datetime.utcnow, description="Creation timestamp")
    updated_at: datetime = Field(default_factory=datetime.utcnow, description="Last rename or move")

    def touch(self) -> datetime:
        self.updated_at = datetime.utcnow()
        return self.updated_at
