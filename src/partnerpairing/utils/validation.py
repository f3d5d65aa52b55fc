"""Validation utilities for Partner Pairing.

This module provides reusable validation functions with consistent error handling.
"""

# Partner Pairing
# Copyright (C) 2025  Partner Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import re
from typing import Any, Optional

from partnerpairing.constants import MAX_ITERATIONS, MAX_PARTICIPANT_NAME_LENGTH
from partnerpairing.exceptions import InvalidParticipantException

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Participant Validation ==========


def validate_participant_name(name: Optional[str]) -> ValidationResult:
    """Validate a participant name.

    Surrounding whitespace is stripped; inner whitespace is kept since
    display labels use the last word of the name.

    Args:
        name: Participant name to validate

    Returns:
        ValidationResult with the stripped name as sanitized value

    Example:
        >>> result = validate_participant_name("  Ada Lovelace ")
        >>> result.sanitized_value
        'Ada Lovelace'
    """
    if not isinstance(name, str):
        return ValidationResult(
            is_valid=False,
            error_message=f"Participant name must be text: {name!r}",
        )

    name = name.strip()
    if not name:
        return ValidationResult(
            is_valid=False,
            error_message="Participant name cannot be empty",
        )

    if _CONTROL_CHARS.search(name):
        return ValidationResult(
            is_valid=False,
            error_message=f"Participant name contains control characters: {name!r}",
        )

    if len(name) > MAX_PARTICIPANT_NAME_LENGTH:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Participant name is longer than {MAX_PARTICIPANT_NAME_LENGTH} "
                f"characters: {name[:20]}..."
            ),
        )

    return ValidationResult(is_valid=True, sanitized_value=name)


def validate_participant_name_strict(name: str) -> str:
    """Validate a name and return it stripped, or raise.

    Raises:
        InvalidParticipantException: If the name is invalid
    """
    result = validate_participant_name(name)
    if not result.is_valid:
        raise InvalidParticipantException(result.error_message)
    return result.sanitized_value


# ========== Search Budget Validation ==========


def validate_iterations(iterations: Any) -> ValidationResult:
    """Validate a search iteration budget.

    Args:
        iterations: Number of candidate partitions to try

    Returns:
        ValidationResult with the budget as sanitized value
    """
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        return ValidationResult(
            is_valid=False,
            error_message=f"Iterations must be an integer: {iterations!r}",
        )

    if iterations < 1:
        return ValidationResult(
            is_valid=False,
            error_message=f"Iterations must be at least 1: {iterations}",
        )

    if iterations > MAX_ITERATIONS:
        return ValidationResult(
            is_valid=False,
            error_message=f"Iterations must not exceed {MAX_ITERATIONS}: {iterations}",
        )

    return ValidationResult(is_valid=True, sanitized_value=iterations)
