"""
JavaScript-Python bridge for Pyodide.

Provides a single, clean entry point for the browser form.
All inputs are validated via Pydantic models before processing.

Usage from JavaScript:
    pyodide.globals.set('input_json', JSON.stringify(inputs));
    const result = await pyodide.runPythonAsync(`
        from spokecalc.calculator.js_bridge import calculate
        calculate(input_json)
    `);
    const output = JSON.parse(result);
"""

import json
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypedDict

from ..errors import SpokeCalcError
from ..io import CalculationInputs, CalculationResult
from .core import compute
from .output import to_json, to_markdown, to_summary
from .parsing import parse_inputs
from .validation import validate_inputs


class ValidationMessageDict(TypedDict, total=False):
    """Type for validation message dictionaries sent to JavaScript."""
    severity: str  # "error", "warning", "info"
    code: str  # e.g., "SPOKE_COUNT_UNCOMMON"
    message: str
    suggestion: Optional[str]


class CalculatorOutput(BaseModel):
    """Output from calculate() - matches what JS expects."""
    model_config = ConfigDict(extra='ignore')

    success: bool
    error: Optional[str] = None
    fields: List[str] = Field(default_factory=list)  # Inputs to highlight on error

    results: Optional[CalculationResult] = None

    # Display formats
    summary: Optional[str] = None
    markdown: Optional[str] = None

    # Export document (JSON string for JS to offer as a download)
    export_json: Optional[str] = None

    # Validation
    valid: bool = True
    messages: List[ValidationMessageDict] = Field(default_factory=list)


def calculate(input_json: str) -> str:
    """
    Single entry point for spoke length calculations from JavaScript.

    Args:
        input_json: JSON string with the form's CalculationInputs
                    (camelCase keys, string values)

    Returns:
        JSON string with CalculatorOutput structure
    """
    try:
        data = json.loads(input_json)
        inputs = CalculationInputs.model_validate(data)

        params = parse_inputs(inputs)
        results = compute(params)
        validation = validate_inputs(params)

        output = CalculatorOutput(
            success=True,
            results=results,
            summary=to_summary(results),
            markdown=to_markdown(params, results, validation),
            export_json=to_json(inputs, results),
            valid=validation.valid,
            messages=[
                {
                    'severity': m.severity.value,
                    'message': m.message,
                    'code': m.code,
                    'suggestion': m.suggestion
                }
                for m in validation.messages
            ],
        )

        return output.model_dump_json()

    except json.JSONDecodeError as e:
        return CalculatorOutput(
            success=False,
            error=f"Invalid JSON: {e}"
        ).model_dump_json()

    except SpokeCalcError as e:
        return CalculatorOutput(
            success=False,
            error=str(e),
            fields=list(getattr(e, 'fields', ())),
        ).model_dump_json()

    except Exception as e:
        return CalculatorOutput(
            success=False,
            error=str(e)
        ).model_dump_json()
