# ABOUTME: Exception types raised by the weather dashboard core.
# ABOUTME: Separates fatal fetch failures from invalid caller input.


class WeatherFetchError(Exception):
    """The primary forecast could not be fetched, so no snapshot can be built."""


class InvalidArgument(ValueError):
    """A utility received input outside its documented domain."""
