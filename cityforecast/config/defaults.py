"""Built-in city list shown until a CSV replaces it."""

from cityforecast.config.schema import CityConfig

DEFAULT_CITIES: list[CityConfig] = [
    CityConfig(name="Paris", country="FR", latitude=48.8566, longitude=2.3522),
    CityConfig(name="Amsterdam", country="NL", latitude=52.3676, longitude=4.9041),
    CityConfig(name="Berlin", country="DE", latitude=52.52, longitude=13.405),
]
