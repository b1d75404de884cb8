"""
Pytest configuration and shared fixtures for spokecalc tests.
"""

import pytest

from spokecalc.app import SpokeCalculatorApp
from spokecalc.calculator import parse_inputs
from spokecalc.io import CalculationInputs, MemoryStore


# ─── Raw form values ─────────────────────────────────────────────────────


def _example_values():
    """32-spoke 3-cross wheel with identical hub geometry on both sides."""
    return {
        "erd": "590",
        "pitchCircleLeft": "45",
        "pitchCircleRight": "45",
        "flangeDistanceLeft": "35",
        "flangeDistanceRight": "35",
        "spokeHoleDiameter": "2.6",
        "numberOfSpokes": "32",
        "crossingsLeft": "3",
        "crossingsRight": "3",
    }


def _radial_values():
    """24-spoke radially laced wheel; the chord is exactly |A - B|."""
    return {
        "erd": "600",
        "pitchCircleLeft": "50",
        "pitchCircleRight": "50",
        "flangeDistanceLeft": "30",
        "flangeDistanceRight": "30",
        "spokeHoleDiameter": "2",
        "numberOfSpokes": "24",
        "crossingsLeft": "0",
        "crossingsRight": "0",
    }


@pytest.fixture
def example_values():
    return _example_values()


@pytest.fixture
def example_inputs():
    return CalculationInputs.model_validate(_example_values())


@pytest.fixture
def example_params(example_inputs):
    return parse_inputs(example_inputs)


@pytest.fixture
def radial_inputs():
    return CalculationInputs.model_validate(_radial_values())


# ─── Storage and application ─────────────────────────────────────────────


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def notices():
    """Notifications received by the app fixture, as (message, level) pairs."""
    return []


@pytest.fixture
def app(memory_store, notices):
    """Application with in-memory storage and the bundled presets."""
    return SpokeCalculatorApp(
        storage=memory_store,
        notifier=lambda message, level: notices.append((message, level)),
    )


@pytest.fixture
def calculated_app(app, example_values):
    """Application whose working state holds a computed example calculation."""
    app.apply_inputs(example_values)
    app.calculate()
    return app
