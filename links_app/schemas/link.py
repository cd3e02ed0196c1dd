from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LinkCreate(BaseModel):
    """Create request body.
    
    Plain strings on purpose: the URL and code rules are checked by the
    service so failures are reported as 400 with the service's messages,
    and ``target_url`` is stored exactly as submitted.
    """
    target_url: Optional[str] = Field(None, description="The URL to redirect to")
    custom_code: Optional[str] = Field(
        None, description="Optional code, 6-8 alphanumeric characters"
    )


class LinkResponse(BaseModel):
    """Response schema that serializes the SQLAlchemy Link model
    
    - from_attributes=True enables ORM mode (reads from model attributes)
    - datetimes are rendered as ISO-8601 strings
    """
    id: int
    code: str
    target_url: str
    total_clicks: int
    last_clicked: Optional[datetime] = None
    created_at: datetime

    # Pydantic V2 style configuration
    model_config = ConfigDict(from_attributes=True)


class LinkDeleted(BaseModel):
    message: str = "Link deleted"
    code: str


class HealthStatus(BaseModel):
    ok: bool = True
    version: str
    uptime: int
    timestamp: datetime


class ErrorResponse(BaseModel):
    error: str
