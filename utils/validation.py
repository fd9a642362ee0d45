"""
Validation utilities for input data.

Each validator returns (is_valid, error_message), matching how the event
handlers report problems to the reviewer.
"""

from typing import Any, Dict, List, Optional, Tuple

from models import Rating

REQUIRED_SAMPLE_FIELDS = ['id', 'english_text', 'spanish_translation']


def validate_sample_fields(columns: List[str]) -> Tuple[bool, str]:
    """
    Validate that dataset records/columns include the required fields.

    Args:
        columns: Field names present in the dataset

    Returns:
        Tuple of (is_valid, error_message)
    """
    missing = [col for col in REQUIRED_SAMPLE_FIELDS if col not in columns]

    if missing:
        return False, f"Dataset is missing required fields: {missing}"

    return True, ""


def validate_sample_record(record: Any, position: int) -> Tuple[bool, str]:
    """
    Validate one dataset record before it is turned into a Sample.

    Args:
        record: Raw record from the dataset file
        position: Index of the record, for the error message
    """
    if not isinstance(record, dict):
        return False, f"Record {position} is not an object"

    is_valid, error_msg = validate_sample_fields(list(record.keys()))
    if not is_valid:
        return False, f"Record {position}: {error_msg}"

    standards = record.get('matched_standards')
    if standards is not None and not isinstance(standards, list):
        return False, f"Record {position}: matched_standards must be a list"

    return True, ""


def validate_rating(value: Optional[str]) -> Tuple[bool, str]:
    """Validate a rating chosen in the UI."""
    valid = [r.value for r in Rating]
    if value not in valid:
        return False, f"Invalid rating: {value}. Must be one of {valid}"

    return True, ""


def validate_standard_index(index: int, standards_count: int) -> Tuple[bool, str]:
    """
    Validate that a standard index is within the sample's standards.

    Args:
        index: Index to validate
        standards_count: Number of matched standards
    """
    if index < 0:
        return False, "Standard index cannot be negative"

    if index >= standards_count:
        return False, f"Standard index {index} out of range (standards: {standards_count})"

    return True, ""


def validate_password_input(password: Optional[str]) -> Tuple[bool, str]:
    """Validate that a password was entered at all."""
    if not password or not password.strip():
        return False, "Please enter the access password"

    return True, ""


def summarize_errors(results: Dict[int, str], limit: int = 5) -> str:
    """Join the first `limit` record errors into one message."""
    messages = [results[k] for k in sorted(results)[:limit]]
    extra = len(results) - len(messages)
    if extra > 0:
        messages.append(f"... and {extra} more")
    return "; ".join(messages)
