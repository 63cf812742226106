from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    user_id: int
    name: Optional[str] = None
    account_type: str
    exp: Optional[int] = None


class PageQueryParams(BaseModel):
    page_number: int = 1
    page_size: int = 20


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
