from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    success: bool
    message: str | None = None
    error: str | None = None
    data: Any = None
    count: int | None = None
