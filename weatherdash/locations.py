# ABOUTME: Saved-location store used by the web shell to remember pinned places.
# ABOUTME: Locations are identified by coordinates, never by display name.

from typing import Protocol

from weatherdash.models import Coordinates, SavedLocation


class LocationStore(Protocol):
    def get(self) -> list[SavedLocation]: ...

    def put(self, location: SavedLocation) -> list[SavedLocation]: ...

    def delete(self, coordinates: Coordinates) -> list[SavedLocation]: ...


class InMemoryLocationStore:
    """Process-local LocationStore. Each mutation returns the updated list."""

    def __init__(self, locations: list[SavedLocation] | None = None):
        self._locations: list[SavedLocation] = []
        for location in locations or []:
            self.put(location)

    def get(self) -> list[SavedLocation]:
        return list(self._locations)

    def put(self, location: SavedLocation) -> list[SavedLocation]:
        """Add a location unless one with the same coordinates is already saved."""
        if all(saved.coordinates != location.coordinates for saved in self._locations):
            self._locations.append(location)
        return self.get()

    def delete(self, coordinates: Coordinates) -> list[SavedLocation]:
        self._locations = [saved for saved in self._locations if saved.coordinates != coordinates]
        return self.get()
