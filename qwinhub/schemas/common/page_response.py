from pydantic import BaseModel
from typing import List, Generic, Optional, TypeVar

T = TypeVar("T")


class CursorPage(BaseModel, Generic[T]):
    items: List[T]
    page_size: int
    total: int
    has_more: bool
    next_cursor: Optional[str] = None
