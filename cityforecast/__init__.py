"""City weather forecast viewer backed by the 7Timer civil light API."""

__version__ = "0.1.0"
