"""
Pydantic schemas for Locale API
"""
from pydantic import BaseModel


class LocaleResponse(BaseModel):
    """Schema for locale response"""
    id: str
    name: str
    plural_count: int

    class Config:
        from_attributes = True
