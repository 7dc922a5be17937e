"""
Favorites Service

CONTRACT:
    Input:  asset id (toggle / remove)
    Output: updated flat list of asset ids
"""

from coindash.services.favorites.service import FavoritesService, resolve_favorites

__all__ = ["FavoritesService", "resolve_favorites"]
