"""Pydantic schemas for catalog input."""

from pydantic import BaseModel, Field


class BookCreate(BaseModel):
    """Schema for registering one or more copies of a book."""

    isbn: int = Field(..., description="ISBN, shared by every copy")
    title: str = Field(..., min_length=1, description="Book title")
    author: str = Field(..., min_length=1, description="Primary author")
    year_published: int = Field(..., description="Publication year")
    copies: int = Field(1, gt=0, description="Number of copies to register")

    model_config = {"strict": True}
