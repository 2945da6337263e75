from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ErrorResponse(BaseModel):
    timestamp: datetime
    status: int
    error: str
    message: str
    trace_id: Optional[str] = None
