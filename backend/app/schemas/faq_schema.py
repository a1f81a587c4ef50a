from pydantic import BaseModel, Field
from typing import Optional

from .common import non_nullable

class FAQCreate(BaseModel):
    question: str = Field(..., min_length=1, max_length=500)
    answer: str = Field(..., min_length=1, max_length=2000)
    is_active: bool = True
    sort_order: int = Field(999, ge=0)

class FAQUpdate(BaseModel):
    question: Optional[str] = Field(None, min_length=1, max_length=500)
    answer: Optional[str] = Field(None, min_length=1, max_length=2000)
    is_active: Optional[bool] = None
    sort_order: Optional[int] = Field(None, ge=0)

    check_required = non_nullable("question", "answer", "is_active", "sort_order")

class FAQ(BaseModel):
    id: str
    question: str
    answer: str
    is_active: bool = True
    sort_order: int = 999
