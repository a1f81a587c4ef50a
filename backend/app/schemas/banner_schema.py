from datetime import datetime, timezone
from pydantic import BaseModel, Field, model_validator
from typing import Optional

from .common import non_nullable

def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

class BannerBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    subtitle: Optional[str] = Field(None, max_length=200)
    image: Optional[str] = Field(None, description="Desktop image URL or data URI")
    mobile_image: Optional[str] = None
    link: Optional[str] = None
    link_text: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=1000)
    background_color: Optional[str] = Field(None, max_length=20)
    text_color: Optional[str] = Field(None, max_length=20)
    start_date: Optional[datetime] = Field(None, description="Hidden before this moment")
    end_date: Optional[datetime] = Field(None, description="Hidden after this moment")
    sort_order: int = Field(0, ge=0)
    is_active: bool = True

    @model_validator(mode="after")
    def check_window(self):
        if self.start_date and self.end_date and _aware(self.start_date) > _aware(self.end_date):
            raise ValueError("start_date must not be after end_date")
        return self

class BannerCreate(BannerBase):
    pass

class BannerUpdate(BaseModel):
    """Partial banner update; send null for a date to remove that bound"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    subtitle: Optional[str] = Field(None, max_length=200)
    image: Optional[str] = None
    mobile_image: Optional[str] = None
    link: Optional[str] = None
    link_text: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=1000)
    background_color: Optional[str] = Field(None, max_length=20)
    text_color: Optional[str] = Field(None, max_length=20)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    sort_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    check_required = non_nullable("title", "sort_order", "is_active")

class Banner(BaseModel):
    id: str
    title: str
    subtitle: Optional[str] = None
    image: Optional[str] = None
    mobile_image: Optional[str] = None
    link: Optional[str] = None
    link_text: Optional[str] = None
    description: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True
