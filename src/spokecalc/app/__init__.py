"""
Spokecalc application layer - session state and user actions.

Example:
    >>> from spokecalc.app import SpokeCalculatorApp
    >>> from spokecalc.io import JsonFileStore
    >>>
    >>> app = SpokeCalculatorApp(storage=JsonFileStore("storage.json"))
    >>> app.load_preset("road-front-28h-2x")
    >>> app.set_input("crossingsLeft", "3")
    >>> app.calculate()
"""

from .controller import SpokeCalculatorApp, log_notifier
from .messages import MESSAGES, translate
from .state import AppState

__all__ = [
    "SpokeCalculatorApp",
    "AppState",
    "log_notifier",
    "MESSAGES",
    "translate",
]
