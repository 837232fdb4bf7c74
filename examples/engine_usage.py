"""
Example usage of the randomization engine.

Builds scenarios in code and from a YAML file, and shows the weather and
economy modifiers. Runs offline: the generative field uses a local stub
provider unless an OpenAI key is available.
"""

import asyncio
import json
import logging
import os
from pathlib import Path

from domain_forge import (
    EconomyModifier,
    ProviderTimeoutError,
    RandomizationEngine,
    WeatherModifier,
    build_engine,
    load_scenario,
)
from domain_forge.utils.llm import create_provider

SCENARIO_FILE = Path(__file__).parent / "scenarios" / "market_day.yaml"


async def offline_provider(prompt, model=None):
    """Stand-in text provider."""
    return f"[offline] {prompt.lower()}"


async def slow_provider(prompt, model=None):
    await asyncio.sleep(1)
    return "too late"


async def example_engine():
    """Chain operations on an engine and run it twice with the same seed."""
    print("=== Engine ===\n")

    def make_engine():
        engine = RandomizationEngine(seed=12345)
        if os.getenv("OPENAI_API_KEY"):
            engine.register_provider("npc", create_provider("gpt-4o-mini"))
        else:
            engine.register_provider("npc", offline_provider)
        return (
            engine
            .set_baseline({"environment": {"temperature": 20}})
            .apply_gaussian_noise("physics.gravity", mean=9.8, std_dev=0.5)
            .apply_weighted_categorical("weather", {"rain": 0.7, "sunny": 0.3})
            .apply_generative_fuzzing(
                "npc.personality",
                provider="npc",
                prompt="Generate a highly stressed merchant",
                timeout_ms=5000,
                fallback="calm",
            )
        )

    first = await make_engine().run()
    second = await make_engine().run()
    print(json.dumps(first, indent=2))
    print(f"\nSame seed, same record: {first == second}\n")


async def example_timeouts():
    """Timeouts raise without a fallback and use the fallback otherwise."""
    print("=== Timeouts ===\n")

    engine = (
        RandomizationEngine(seed=1)
        .register_provider("slow", slow_provider)
        .apply_generative_fuzzing("bio", provider="slow", prompt="x", timeout_ms=100)
    )
    try:
        await engine.run()
    except ProviderTimeoutError as e:
        print(f"Caught: {e}")

    engine = (
        RandomizationEngine(seed=1)
        .register_provider("slow", slow_provider)
        .apply_generative_fuzzing(
            "bio", provider="slow", prompt="x", timeout_ms=100, fallback="unknown"
        )
    )
    print(f"With fallback: {await engine.run()}\n")


async def example_scenario_file():
    """Load a scenario definition and generate three variations."""
    print("=== Scenario file ===\n")

    definition = load_scenario(SCENARIO_FILE)
    engine = build_engine(definition)
    engine.register_provider("offline", offline_provider)

    for record in await engine.run_many(3):
        print(json.dumps(record))
    print()


def example_modifiers():
    print("=== Modifiers ===\n")

    weather = WeatherModifier(seed="harbour").apply()
    print(f"Weather: {weather.to_dict()}")

    economy = EconomyModifier(seed="harbour").apply(
        [{"name": "bread", "base_price": 2.0}, {"name": "fuel", "base_price": 80.0}]
    )
    print(f"Inflation severity: {economy.inflation_severity:.3f}")
    for item in economy.items:
        print(f"  {item.name}: {item.base_price:.2f} -> {item.price:.2f}")
    print()


async def main():
    await example_engine()
    await example_timeouts()
    await example_scenario_file()
    example_modifiers()


if __name__ == '__main__':
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(main())
