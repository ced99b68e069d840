"""
Request bodies for the JSON endpoints.
"""
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class LookRequest(BaseModel):
    """Input for POST /api/generate-look"""
    occasion: Optional[str] = None
    season: Optional[str] = None
    weather: Optional[str] = None
    preferred_styles: Optional[Union[str, List[str]]] = Field(
        None, alias="preferredStyles", description="List or comma-separated string"
    )
    exclude_items: Optional[List[str]] = Field(None, alias="excludeItems")
    city: Optional[str] = Field(None, description="City for weather context when weather is empty")

    model_config = ConfigDict(populate_by_name=True)


class FeedbackRequest(BaseModel):
    """Input for POST /api/feedback"""
    look_id: Optional[str] = Field(None, alias="lookId")
    rating: Optional[str] = Field(None, description="approve or reject")
    comments: Optional[str] = ""

    model_config = ConfigDict(populate_by_name=True)


class ClothingItemUpdate(BaseModel):
    """Partial update for a catalog item"""
    image_url: Optional[str] = Field(None, alias="imageUrl")
    type: Optional[str] = None
    colors: Optional[List[str]] = None
    styles: Optional[List[str]] = None
    season: Optional[List[str]] = None
    occasion: Optional[List[str]] = None
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="forbid")
