"""
Dashboard contract: the server-held theme, selection and favorites.
"""

from pydantic import BaseModel, Field

from coindash.services.dashboard.state import DashboardState


class DashboardView(BaseModel):
    theme: str
    selected_asset: str
    period: str
    favorites: list[str] = Field(default_factory=list)
    is_favorite: bool = Field(
        default=False, description="Whether the selected asset is a favorite"
    )

    @classmethod
    def from_state(cls, state: DashboardState) -> "DashboardView":
        return cls(
            theme=state.theme,
            selected_asset=state.selected_asset,
            period=state.period,
            favorites=list(state.favorites),
            is_favorite=state.is_favorite,
        )
