"""
WeatherModifier: logically consistent weather snapshots.

Layers consistency rules over the seeded samplers:
- cloud_cover is always in [0, 1]
- when raining, cloud_cover is at least 0.4
- wind_speed_kmh is never negative
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from . import categorical, statistical
from .prng import Seed, SeededPRNG, default_seed

RAIN_PROBABILITY = 0.3
MIN_RAIN_CLOUD_COVER = 0.4
MAX_CLEAR_CLOUD_COVER = 0.85
OVERCAST_THRESHOLD = 0.6

DEFAULT_TEMPERATURE_C = 15.0
TEMPERATURE_STD_DEV = 8.0
DEFAULT_WIND_SPEED_KMH = 15.0
WIND_STD_DEV = 10.0

RAIN_CONDITIONS = {"drizzle": 0.3, "rain": 0.5, "heavy_rain": 0.2}
CLOUDY_CONDITIONS = {"overcast": 0.6, "partly_cloudy": 0.4}
CLEAR_CONDITIONS = {"sunny": 0.7, "partly_cloudy": 0.3}


@dataclass
class WeatherBaseline:
    """Partial weather state used as the starting point."""
    raining: Optional[bool] = None
    cloud_cover: Optional[float] = None
    temperature_c: Optional[float] = None
    wind_speed_kmh: Optional[float] = None


@dataclass
class WeatherState:
    """A complete weather snapshot."""
    raining: bool
    cloud_cover: float
    temperature_c: float
    wind_speed_kmh: float
    condition: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class WeatherModifier:
    """Generates weather snapshots from a seeded stream."""

    def __init__(self, seed: Optional[Seed] = None):
        self.prng = SeededPRNG(seed if seed is not None else default_seed())

    def apply(self, baseline: Optional[WeatherBaseline] = None) -> WeatherState:
        """
        Randomize around a baseline and return a consistent snapshot.

        Args:
            baseline: Fields to keep (subject to the consistency rules)

        Returns:
            WeatherState with every field populated
        """
        baseline = baseline or WeatherBaseline()

        if baseline.raining is not None:
            raining = baseline.raining
        else:
            raining = self.prng.next() < RAIN_PROBABILITY

        if baseline.cloud_cover is not None:
            if raining:
                cloud_cover = min(max(baseline.cloud_cover, MIN_RAIN_CLOUD_COVER), 1.0)
            else:
                cloud_cover = min(max(baseline.cloud_cover, 0.0), 1.0)
        elif raining:
            cloud_cover = statistical.uniform(
                self.prng, {"min": MIN_RAIN_CLOUD_COVER, "max": 1.0}
            )
        else:
            cloud_cover = statistical.uniform(
                self.prng, {"min": 0.0, "max": MAX_CLEAR_CLOUD_COVER}
            )

        temp_base = (
            baseline.temperature_c
            if baseline.temperature_c is not None
            else DEFAULT_TEMPERATURE_C
        )
        temperature_c = statistical.gaussian(
            self.prng, {"mean": temp_base, "std_dev": TEMPERATURE_STD_DEV}
        )

        wind_base = (
            baseline.wind_speed_kmh
            if baseline.wind_speed_kmh is not None
            else DEFAULT_WIND_SPEED_KMH
        )
        wind_speed_kmh = max(
            0.0,
            statistical.gaussian(self.prng, {"mean": wind_base, "std_dev": WIND_STD_DEV}),
        )

        condition = self._sample_condition(raining, cloud_cover)

        return WeatherState(
            raining=raining,
            cloud_cover=cloud_cover,
            temperature_c=temperature_c,
            wind_speed_kmh=wind_speed_kmh,
            condition=condition,
        )

    def _sample_condition(self, raining: bool, cloud_cover: float) -> str:
        if raining:
            return categorical.sample(self.prng, RAIN_CONDITIONS)
        if cloud_cover > OVERCAST_THRESHOLD:
            return categorical.sample(self.prng, CLOUDY_CONDITIONS)
        return categorical.sample(self.prng, CLEAR_CONDITIONS)
