"""
Bundled preset catalog.

Presets are read-only reference calculations shipped with the package. The
list of preset documents is declared explicitly in PRESET_FILES; every entry
is validated when the catalog loads, and an invalid entry is skipped (and
logged) without aborting the rest of the catalog.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from importlib import resources
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from ..errors import PresetLoadError
from .loaders import CalculationInputs, CalculationResult, PresetDocument
from .schema import validate_preset_document

logger = logging.getLogger(__name__)

# Preset documents bundled in spokecalc/presets/, in display order
PRESET_FILES: Tuple[str, ...] = (
    "mtb-650b-rear-boost.json",
    "road-front-28h-2x.json",
    "xc-front-radial-24h.json",
)

PresetSource = Tuple[str, Union[str, bytes, Dict[str, Any]]]


@dataclass
class Preset:
    """One catalog entry."""
    id: str
    name: str
    document: PresetDocument

    @property
    def category(self) -> Optional[str]:
        return self.document.category

    @property
    def description(self) -> Optional[str]:
        return self.document.description

    @property
    def inputs(self) -> CalculationInputs:
        return self.document.inputs

    @property
    def results(self) -> CalculationResult:
        return self.document.results


@dataclass
class PresetCatalog:
    """Loaded presets plus the entries that failed validation."""
    presets: List[Preset] = field(default_factory=list)
    skipped: List[PresetLoadError] = field(default_factory=list)

    def get(self, preset_id: str) -> Optional[Preset]:
        for preset in self.presets:
            if preset.id == preset_id:
                return preset
        return None

    def __iter__(self) -> Iterator[Preset]:
        return iter(self.presets)

    def __len__(self) -> int:
        return len(self.presets)


def display_name_from_id(preset_id: str) -> str:
    """'road-front_28h' -> 'Road Front 28h'"""
    spaced = preset_id.replace('-', ' ').replace('_', ' ')
    return re.sub(r'\b\w', lambda m: m.group(0).upper(), spaced)


def bundled_preset_sources() -> List[PresetSource]:
    """(id, JSON text) for every declared preset file."""
    package_dir = resources.files("spokecalc") / "presets"
    sources = []
    for filename in PRESET_FILES:
        preset_id = filename[:-len(".json")] if filename.endswith(".json") else filename
        sources.append((preset_id, (package_dir / filename).read_text(encoding="utf-8")))
    return sources


def _parse_preset(preset_id: str, data: Union[str, bytes, Dict[str, Any]]) -> Preset:
    """Validate one preset document, raising PresetLoadError on any problem."""
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise PresetLoadError(preset_id, f"invalid JSON ({e})") from e

    problems = validate_preset_document(data)
    if problems:
        raise PresetLoadError(preset_id, "; ".join(problems))

    try:
        document = PresetDocument.model_validate(data)
    except PydanticValidationError as e:
        raise PresetLoadError(preset_id, f"{e.error_count()} malformed value(s)") from e

    name = document.display_name or display_name_from_id(preset_id)
    return Preset(id=preset_id, name=name, document=document)


def load_presets(
    sources: Optional[Iterable[PresetSource]] = None,
    on_error: Optional[Callable[[List[PresetLoadError]], None]] = None
) -> PresetCatalog:
    """
    Load and validate the preset catalog.

    Args:
        sources: (id, document) pairs; documents may be JSON text or dicts.
                 Defaults to the bundled preset files.
        on_error: Called once, with every skipped entry, if any entry failed

    Returns:
        PresetCatalog with the valid presets in source order
    """
    if sources is None:
        sources = bundled_preset_sources()

    catalog = PresetCatalog()
    for preset_id, data in sources:
        try:
            catalog.presets.append(_parse_preset(preset_id, data))
        except PresetLoadError as e:
            logger.error(str(e))
            catalog.skipped.append(e)

    logger.debug(f"Loaded {len(catalog.presets)} preset(s), skipped {len(catalog.skipped)}")

    if catalog.skipped and on_error is not None:
        on_error(list(catalog.skipped))

    return catalog
