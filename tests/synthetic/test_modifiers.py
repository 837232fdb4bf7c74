"""Tests for the weather and economy modifiers."""

import pytest

from domain_forge.synthetic.economy_modifier import EconomyItem, EconomyModifier
from domain_forge.synthetic.weather_modifier import (
    CLEAR_CONDITIONS,
    CLOUDY_CONDITIONS,
    MIN_RAIN_CLOUD_COVER,
    RAIN_CONDITIONS,
    WeatherBaseline,
    WeatherModifier,
)

_ITEMS = [
    {"name": "bread", "base_price": 2.0},
    {"name": "fuel", "base_price": 80.0},
    {"name": "rent", "base_price": 1200.0},
]


class TestWeatherModifier:

    def test_snapshots_are_consistent(self):
        modifier = WeatherModifier(seed=7)
        for _ in range(1000):
            state = modifier.apply()
            assert 0.0 <= state.cloud_cover <= 1.0
            assert state.wind_speed_kmh >= 0.0
            if state.raining:
                assert state.cloud_cover >= MIN_RAIN_CLOUD_COVER
                assert state.condition in RAIN_CONDITIONS
            else:
                assert state.condition in set(CLEAR_CONDITIONS) | set(CLOUDY_CONDITIONS)

    def test_both_rain_outcomes_occur(self):
        modifier = WeatherModifier(seed=3)
        outcomes = {modifier.apply().raining for _ in range(200)}
        assert outcomes == {True, False}

    def test_same_seed_same_snapshots(self):
        a, b = WeatherModifier(seed="coast"), WeatherModifier(seed="coast")
        for _ in range(20):
            assert a.apply().to_dict() == b.apply().to_dict()

    def test_baseline_rain_raises_low_cloud_cover(self):
        state = WeatherModifier(seed=1).apply(
            WeatherBaseline(raining=True, cloud_cover=0.1)
        )
        assert state.raining is True
        assert state.cloud_cover == MIN_RAIN_CLOUD_COVER

    def test_baseline_cloud_cover_is_clamped(self):
        dry = WeatherModifier(seed=1).apply(WeatherBaseline(raining=False, cloud_cover=1.7))
        wet = WeatherModifier(seed=1).apply(WeatherBaseline(raining=True, cloud_cover=1.7))
        assert dry.cloud_cover == 1.0
        assert wet.cloud_cover == 1.0

    def test_baseline_temperature_centres_samples(self):
        modifier = WeatherModifier(seed=11)
        temps = [
            modifier.apply(WeatherBaseline(temperature_c=-20.0)).temperature_c
            for _ in range(500)
        ]
        assert abs(sum(temps) / len(temps) + 20.0) < 2.0

    def test_to_dict_has_every_field(self):
        data = WeatherModifier(seed=2).apply().to_dict()
        assert set(data) == {
            "raining",
            "cloud_cover",
            "temperature_c",
            "wind_speed_kmh",
            "condition",
        }


class TestEconomyModifier:

    def test_guarantees_hold_for_sampled_severity(self):
        modifier = EconomyModifier(seed=99)
        for _ in range(500):
            state = modifier.apply(_ITEMS)
            assert 0.0 <= state.inflation_severity <= 1.0
            assert state.price_multiplier >= 1.0
            assert 0.0 < state.purchasing_power <= 1.0
            for item in state.items:
                assert item.price >= item.base_price

    def test_zero_severity_leaves_prices_unchanged(self):
        state = EconomyModifier(seed=1).apply(_ITEMS, inflation_severity=0.0)

        assert state.price_multiplier == 1.0
        assert state.purchasing_power == 1.0
        assert [item.price for item in state.items] == [2.0, 80.0, 1200.0]

    def test_full_severity_triples_multiplier(self):
        state = EconomyModifier(seed=1).apply(_ITEMS, inflation_severity=1.0)

        assert state.price_multiplier == pytest.approx(3.0)
        assert state.purchasing_power == pytest.approx(1 / 3)
        for item in state.items:
            assert item.price == pytest.approx(item.base_price * 3.0, rel=0.3)

    @pytest.mark.parametrize("override, expected", [(-0.5, 0.0), (2.0, 1.0)])
    def test_override_is_clamped(self, override, expected):
        state = EconomyModifier(seed=1).apply([], inflation_severity=override)
        assert state.inflation_severity == expected

    def test_accepts_economy_items(self):
        items = [EconomyItem(name="salt", base_price=1.0, price=1.0)]
        state = EconomyModifier(seed=4).apply(items, inflation_severity=0.5)

        assert state.items[0].name == "salt"
        assert state.items[0].price >= 1.0

    def test_no_items(self):
        state = EconomyModifier(seed=4).apply()
        assert state.items == []

    def test_same_seed_same_state(self):
        a = EconomyModifier(seed=2024).apply(_ITEMS).to_dict()
        b = EconomyModifier(seed=2024).apply(_ITEMS).to_dict()
        assert a == b

    def test_severity_is_skewed_low(self):
        modifier = EconomyModifier(seed=5)
        severities = [modifier.apply().inflation_severity for _ in range(2000)]
        mean = sum(severities) / len(severities)
        assert 0.1 < mean < 0.5
