"""UrbanLiving rental listings API."""

__version__ = "0.1.0"
