"""Success envelope shared by every endpoint."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """``{"success": true, "data": ..., "message": ...}``"""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
