"""
Input validation and loading module.
Parses user-entered system size, validates the calculation request,
and loads JSON scenarios with defaults and audit trail.
"""

import json
import math
import re
from copy import deepcopy
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Tuple, Union

from .prices import is_known_state

STATE_REQUIRED_MSG = "Select a state"
SIZE_REQUIRED_MSG = "Enter a system size > 0"

DEFAULT_SIZE_KW_DC = 5.0

LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class SystemSpec:
    """A validated calculation request."""

    state_name: str
    size_kw_dc: float


def _leading_number(text: str) -> Optional[float]:
    """Number at the start of the text, ignoring any trailing characters."""
    match = LEADING_NUMBER.match(text)
    if not match:
        return None
    return float(match.group(0))


def parse_size(value: Union[str, float, int, None]) -> float:
    """
    Parse a system size entry to kW-DC.

    Text is read up to the first character that cannot continue a number,
    so "12kW" is 12.0. Empty text, a lone decimal point, non-numeric values
    and anything that is not a finite number all parse to 0.0 so that
    validation rejects them.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        size = float(value)
    elif isinstance(value, str):
        size = _leading_number(value)
        if size is None:
            return 0.0
    else:
        return 0.0
    return size if math.isfinite(size) else 0.0


def format_size_input(text: str) -> str:
    """Normalize the size display string to two decimals."""
    stripped = text.strip()
    if stripped in ('', '.'):
        return ''
    size = _leading_number(stripped)
    if size is None:
        return text
    return f"{size:.2f}"


def validate_request(state: Optional[str],
                     size: Union[str, float, int, None]) -> Tuple[Optional[SystemSpec], Optional[str]]:
    """
    Validate a calculation request.

    Returns:
        (system_spec, None) when valid, otherwise (None, error_message)
    """
    if not isinstance(state, str) or not state:
        return None, STATE_REQUIRED_MSG

    size_kw_dc = parse_size(size)
    if size_kw_dc <= 0:
        return None, SIZE_REQUIRED_MSG

    return SystemSpec(state_name=state, size_kw_dc=size_kw_dc), None


class InputValidator:
    """Validates and processes scenario JSON with defaults and audit tracking."""

    def __init__(self):
        self.defaults_used = []
        self.validation_errors = []
        self.warnings = []

    def load_and_validate(self, json_path: str) -> Dict[str, Any]:
        """Load JSON and validate with defaults."""
        with open(json_path, 'r') as f:
            data = json.load(f)

        return self.validate(data)

    def validate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply defaults to an already-parsed scenario and validate it."""
        if not isinstance(data, dict):
            raise ValueError("Input validation failed: ['scenario must be a JSON object']")

        validated = self._apply_defaults(data)
        self._validate_inputs(validated)

        if self.validation_errors:
            raise ValueError(f"Input validation failed: {self.validation_errors}")

        return validated

    def _apply_defaults(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply defaults for missing values."""
        result = deepcopy(data)
        self._set_default(result, 'state', '', 'state')
        self._set_default(result, 'size_kw_dc', DEFAULT_SIZE_KW_DC, 'size_kw_dc')
        return result

    def _set_default(self, section: Dict, key: str, default: Any, path: str):
        """Set a default value and track it."""
        if key not in section or section[key] is None:
            section[key] = default
            self.defaults_used.append(f"{path} = {default}")

    def _validate_inputs(self, data: Dict[str, Any]):
        """Validate input constraints."""
        state = data['state']
        size = data['size_kw_dc']
        if not isinstance(state, str):
            self.validation_errors.append(f"state must be a string, got {type(state).__name__}")
        if isinstance(size, bool) or not isinstance(size, (str, int, float)):
            self.validation_errors.append(f"size_kw_dc must be a number, got {type(size).__name__}")
        if self.validation_errors:
            return

        spec, error = validate_request(state, size)
        if error:
            self.validation_errors.append(error)
            return

        data['size_kw_dc'] = spec.size_kw_dc
        if not is_known_state(spec.state_name):
            self.warnings.append(
                f"Unknown state '{spec.state_name}', using default electricity price"
            )


def load_inputs(json_path: str) -> Tuple[Dict[str, Any], List[str], List[str]]:
    """
    Load and validate inputs from JSON file.

    Returns:
        (validated_data, defaults_used, warnings)
    """
    validator = InputValidator()
    data = validator.load_and_validate(json_path)
    return data, validator.defaults_used, validator.warnings
