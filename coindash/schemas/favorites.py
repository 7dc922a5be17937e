"""
Favorites contract: a flat list of asset ids plus resolved details.
"""

from pydantic import BaseModel, Field

from coindash.schemas.market import Asset


class FavoritesResponse(BaseModel):
    ids: list[str] = Field(default_factory=list)
    details: list[Asset] = Field(
        default_factory=list,
        description="Favorites resolved against the catalog; unknown ids omitted",
    )
