"""
EconomyModifier: randomized inflation stressor over a set of priced items.

Guarantees:
- inflation_severity is in [0, 1]
- price_multiplier is >= 1
- purchasing_power is in (0, 1]
- every item's price is >= its base price
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from . import statistical
from .prng import Seed, SeededPRNG, default_seed

MAX_EXTRA_MULTIPLIER = 2.0
ITEM_NOISE_SCALE = 0.05


@dataclass
class EconomyItem:
    name: str
    base_price: float
    price: float


@dataclass
class EconomyState:
    """Economy snapshot after inflation."""
    inflation_severity: float
    price_multiplier: float
    purchasing_power: float
    items: List[EconomyItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


class EconomyModifier:
    """Applies an inflation stressor drawn from a seeded stream."""

    def __init__(self, seed: Optional[Seed] = None):
        self.prng = SeededPRNG(seed if seed is not None else default_seed())

    def _sample_severity(self) -> float:
        """
        Right-skewed severity: the max of two draws scaled by a clamped
        Gaussian, so extreme inflation is possible but uncommon.
        """
        peak = max(self.prng.next(), self.prng.next())
        curve = _clamp(
            statistical.gaussian(self.prng, {"mean": 0.5, "std_dev": 0.25}), 0.0, 1.0
        )
        return peak * curve

    def apply(
        self,
        items: Optional[Iterable[Union[Mapping[str, Any], EconomyItem]]] = None,
        inflation_severity: Optional[float] = None,
    ) -> EconomyState:
        """
        Apply inflation to items.

        Args:
            items: Mappings with 'name' and 'base_price' (or EconomyItem)
            inflation_severity: Override in [0, 1]; clamped when outside

        Returns:
            EconomyState with inflated prices
        """
        if inflation_severity is not None:
            severity = _clamp(inflation_severity, 0.0, 1.0)
        else:
            severity = self._sample_severity()

        price_multiplier = 1.0 + severity * MAX_EXTRA_MULTIPLIER
        purchasing_power = min(1.0, 1.0 / price_multiplier)

        priced = []
        for item in items or []:
            if isinstance(item, EconomyItem):
                name, base_price = item.name, item.base_price
            else:
                name, base_price = item["name"], item["base_price"]

            # N(0, 0) is undefined, so a zero severity means no market noise
            noise = 0.0
            if severity > 0:
                noise = statistical.gaussian(
                    self.prng, {"mean": 0.0, "std_dev": ITEM_NOISE_SCALE * severity}
                )
            price = max(base_price, base_price * (price_multiplier + noise))
            priced.append(EconomyItem(name=name, base_price=base_price, price=price))

        return EconomyState(
            inflation_severity=severity,
            price_multiplier=price_multiplier,
            purchasing_power=purchasing_power,
            items=priced,
        )
