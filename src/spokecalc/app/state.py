from dataclasses import dataclass, field
from typing import List, Optional

from ..calculator.validation import ValidationResult
from ..enums import Language
from ..io import CalculationInputs, CalculationResult, SavedCalculation


@dataclass
class AppState:
    """Working state of one calculator session, owned by the controller."""
    inputs: CalculationInputs = field(default_factory=CalculationInputs.defaults)
    results: CalculationResult = field(default_factory=CalculationResult)
    validation: Optional[ValidationResult] = None
    saved: List[SavedCalculation] = field(default_factory=list)
    selected_preset: str = ""
    language: Language = Language.EN

    def clear_results(self) -> None:
        self.results = CalculationResult()
        self.validation = None
