"""
Application controller for the spoke calculator.

Owns the working AppState and routes each user action to the calculator and
the persistence layer. Every action recovers its own errors: the user is
notified and the working state is left as it was before the action.
"""

import json
import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from ..calculator import compute, format_on_blur, missing_fields, parse_inputs, sanitize_edit
from ..calculator.validation import validate_inputs
from ..constants import PREFERRED_LANGUAGE_KEY
from ..enums import Language, NoticeLevel
from ..errors import FormatError, PresetLoadError, ValidationError
from ..io import (
    CalculationResult,
    KeyValueStore,
    MemoryStore,
    PresetCatalog,
    SavedCalculation,
    SavedCalculationStore,
    export_document,
    import_document,
    load_calculation,
    load_presets,
    save_export_json,
)
from ..io.presets import PresetSource
from .messages import translate
from .state import AppState

logger = logging.getLogger(__name__)

Notifier = Callable[[str, NoticeLevel], None]
Confirm = Callable[[str], bool]

_LOG_LEVELS = {
    NoticeLevel.SUCCESS: logging.INFO,
    NoticeLevel.INFO: logging.INFO,
    NoticeLevel.WARNING: logging.WARNING,
    NoticeLevel.ERROR: logging.ERROR,
}


def log_notifier(message: str, level: NoticeLevel) -> None:
    """Default notifier: route notifications to the log."""
    logger.log(_LOG_LEVELS[level], message)


class SpokeCalculatorApp:
    """
    Top-level controller of a calculator session.

    Args:
        storage: Durable key-value store (default: in-memory)
        notifier: Receives (message, level) for every user notification
        confirm: Asked before irreversible actions; returns True to proceed.
            Without one, deletes proceed unconfirmed.
        presets: Preloaded preset catalog (default: load the bundled presets)
        preset_sources: Alternative preset documents to load instead

    Raises:
        FormatError: If the stored saved-calculation collection is corrupt
    """

    def __init__(
        self,
        storage: Optional[KeyValueStore] = None,
        notifier: Optional[Notifier] = None,
        confirm: Optional[Confirm] = None,
        presets: Optional[PresetCatalog] = None,
        preset_sources: Optional[Iterable[PresetSource]] = None
    ):
        self.storage = storage if storage is not None else MemoryStore()
        self.notifier = notifier or log_notifier
        self.confirm = confirm
        self.store = SavedCalculationStore(self.storage)

        self.state = AppState(
            saved=self.store.all(),
            language=self._stored_language(),
        )

        if presets is None:
            presets = load_presets(preset_sources, on_error=self._on_preset_error)
        self.presets = presets

    # ── Notifications ────────────────────────────────────────────────────

    def _t(self, key: str) -> str:
        return translate(key, self.state.language)

    def _notify(self, key: str, level: NoticeLevel) -> None:
        self.notifier(self._t(key), level)

    def _on_preset_error(self, skipped: List[PresetLoadError]) -> None:
        self._notify("alerts.presetLoadError", NoticeLevel.ERROR)

    def _stored_language(self) -> Language:
        stored = self.storage.get(PREFERRED_LANGUAGE_KEY)
        try:
            return Language(stored) if stored else Language.EN
        except ValueError:
            logger.warning(f"Ignoring unknown stored language {stored!r}")
            return Language.EN

    def set_language(self, language: Union[Language, str]) -> None:
        language = Language(language)
        self.state.language = language
        self.storage.set(PREFERRED_LANGUAGE_KEY, language.value)

    # ── Form editing ─────────────────────────────────────────────────────

    def set_input(self, field: str, value: str) -> str:
        """
        Edit one form field (by JSON key).

        The value passes through the form's keystroke policy; any accepted
        change invalidates the current result.

        Returns:
            The value the field now holds
        """
        previous = self.state.inputs.get_field(field)
        accepted = sanitize_edit(field, value, previous)
        if accepted != previous:
            self.state.inputs = self.state.inputs.with_field(field, accepted)
            self.state.clear_results()
        return accepted

    def apply_inputs(self, values: Dict[str, str]) -> None:
        """Set fields programmatically, bypassing the keystroke policy."""
        inputs = self.state.inputs
        for field, value in values.items():
            inputs = inputs.with_field(field, value)
        if inputs.to_dict() != self.state.inputs.to_dict():
            self.state.inputs = inputs
            self.state.clear_results()

    def blur_input(self, field: str) -> str:
        """Field lost focus: apply display formatting (spoke hole diameter)."""
        current = self.state.inputs.get_field(field)
        formatted = format_on_blur(field, current)
        if formatted != current:
            self.state.inputs = self.state.inputs.with_field(field, formatted)
        return formatted

    # ── Calculation ──────────────────────────────────────────────────────

    def calculate(self) -> Optional[CalculationResult]:
        """Compute spoke lengths from the working inputs."""
        inputs = self.state.inputs
        if missing_fields(inputs):
            self._notify("alerts.fillAllFields", NoticeLevel.WARNING)
            return None

        try:
            params = parse_inputs(inputs)
            results = compute(params)
        except ValidationError as e:
            logger.warning(f"Calculation rejected: {e}")
            self._notify("alerts.invalidInput", NoticeLevel.WARNING)
            return None

        self.state.results = results
        self.state.validation = validate_inputs(params)
        return results

    # ── Saved calculations ───────────────────────────────────────────────

    def save(self, name: str) -> Optional[SavedCalculation]:
        """Save the working calculation under a name."""
        if not name.strip():
            self._notify("alerts.enterCalculationName", NoticeLevel.WARNING)
            return None
        if not self.state.results.is_complete:
            self._notify("alerts.performCalculationFirst", NoticeLevel.WARNING)
            return None

        record = self.store.save(name, self.state.inputs, self.state.results)
        self.state.saved = self.store.all()
        self._notify("alerts.saved", NoticeLevel.SUCCESS)
        return record

    def load(self, calculation: Union[SavedCalculation, int]) -> bool:
        """Replace the working inputs/results with copies of a saved entry."""
        if not isinstance(calculation, SavedCalculation):
            found = self.store.get(calculation)
            if found is None:
                logger.warning(f"No saved calculation with id {calculation}")
                return False
            calculation = found

        self.state.inputs, self.state.results = load_calculation(calculation)
        self.state.validation = None
        return True

    def delete(self, calculation_id: int) -> bool:
        """Delete a saved entry after confirmation. Unknown ids are a no-op."""
        if self.confirm is not None and not self.confirm(self._t("dialog.deleteConfirm.message")):
            return False

        removed = self.store.delete(calculation_id)
        if removed:
            self.state.saved = self.store.all()
            self._notify("alerts.deleted", NoticeLevel.SUCCESS)
        return removed

    # ── Export / import ──────────────────────────────────────────────────

    def export(self) -> Optional[str]:
        """Export document of the working calculation, as JSON text."""
        try:
            document = export_document(self.state.inputs, self.state.results)
        except ValidationError:
            self._notify("alerts.performCalculationFirst", NoticeLevel.WARNING)
            return None
        return json.dumps(document, indent=2)

    def export_to_file(self, filepath: Union[str, Path]) -> Optional[Path]:
        """Write the export document to disk (a directory gets a timestamped name)."""
        try:
            written = save_export_json(filepath, self.state.inputs, self.state.results)
        except ValidationError:
            self._notify("alerts.performCalculationFirst", NoticeLevel.WARNING)
            return None
        self._notify("alerts.jsonDownloaded", NoticeLevel.SUCCESS)
        return written

    def import_json(self, text: Union[str, bytes]) -> bool:
        """Replace the working inputs/results with those of an export document."""
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Import failed: {e}")
            self._notify("alerts.jsonLoadFailed", NoticeLevel.ERROR)
            return False

        try:
            inputs, results = import_document(data)
        except FormatError as e:
            logger.warning(f"Import rejected: {e}")
            self._notify("alerts.invalidJsonFormat", NoticeLevel.ERROR)
            return False

        self.state.inputs = inputs
        self.state.results = results
        self.state.validation = None
        self._notify("alerts.jsonLoaded", NoticeLevel.SUCCESS)
        return True

    def import_file(self, filepath: Union[str, Path]) -> bool:
        # Decoding is left to import_json, so a UTF-8 BOM is accepted
        try:
            data = Path(filepath).read_bytes()
        except OSError as e:
            logger.warning(f"Import failed: {e}")
            self._notify("alerts.jsonLoadFailed", NoticeLevel.ERROR)
            return False
        return self.import_json(data)

    # ── Presets ──────────────────────────────────────────────────────────

    def load_preset(self, preset_id: str) -> bool:
        """Load a preset into the working state; an empty id is ignored."""
        if not preset_id:
            return False

        preset = self.presets.get(preset_id)
        if preset is None:
            logger.warning(f"Unknown preset {preset_id!r}")
            return False

        self.state.inputs = preset.inputs.model_copy(deep=True)
        self.state.results = preset.results.model_copy(deep=True)
        self.state.validation = None
        self.state.selected_preset = preset_id
        return True
