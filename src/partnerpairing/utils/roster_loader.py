"""Reading rosters and previous groupings from disk."""

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

import csv
import json
from collections import Counter
from pathlib import Path
from typing import Any, List, Union

from partnerpairing.constants import (
    ROSTER_CSV_EXTENSION,
    ROSTER_CSV_HEADERS,
    ROSTER_JSON_EXTENSION,
    ROSTER_TEXT_EXTENSIONS,
)
from partnerpairing.exceptions import FileLoadException, InvalidParticipantException
from partnerpairing.type_hints import Group, Participant
from partnerpairing.utils import setup_logger
from partnerpairing.utils.validation import validate_participant_name

logger = setup_logger(__name__)


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise FileLoadException(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise FileLoadException(f"Invalid JSON in {path}: {e}") from e


def _read_text_names(path: Path) -> List[str]:
    names = []
    check_header = path.suffix.lower() == ROSTER_CSV_EXTENSION
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            for row in csv.reader(f):
                if not row or not row[0].strip() or row[0].lstrip().startswith("#"):
                    continue
                if check_header:
                    check_header = False
                    if row[0].strip().lower() in ROSTER_CSV_HEADERS:
                        continue
                names.append(row[0])
    except OSError as e:
        raise FileLoadException(f"Cannot read {path}: {e}") from e
    return names


def _clean_names(raw_names: List[Any], source: Path) -> List[Participant]:
    names = []
    for position, raw in enumerate(raw_names, start=1):
        result = validate_participant_name(raw)
        if not result:
            raise InvalidParticipantException(
                f"{source}, entry {position}: {result.error_message}"
            )
        names.append(result.sanitized_value)
    return names


def load_roster(path: Union[str, Path]) -> List[Participant]:
    """Load the participant list for a session.

    ``.json`` files hold an array of names; ``.txt`` and ``.csv`` files
    hold one name per line (first column), with blank lines and ``#``
    comments skipped. A first ``.csv`` row reading ``name``, ``participant``
    or ``student`` is taken as a header and skipped. Duplicates are kept
    but reported.

    Raises:
        FileLoadException: If the file is missing or malformed
        InvalidParticipantException: If a name is invalid
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ROSTER_JSON_EXTENSION:
        data = _read_json(path)
        if not isinstance(data, list):
            raise FileLoadException(f"{path} must contain a JSON array of names")
        raw_names = data
    elif suffix in ROSTER_TEXT_EXTENSIONS:
        raw_names = _read_text_names(path)
    else:
        raise FileLoadException(
            f"Unsupported roster format '{suffix or path.name}'"
            f" (expected {ROSTER_JSON_EXTENSION} or {', '.join(ROSTER_TEXT_EXTENSIONS)})"
        )

    names = _clean_names(raw_names, path)

    duplicates = sorted(name for name, count in Counter(names).items() if count > 1)
    if duplicates:
        logger.warning("Duplicate names in roster %s: %s", path, ", ".join(duplicates))

    logger.info("Loaded %s participants from %s", len(names), path)
    return names


def load_groups(path: Union[str, Path]) -> List[Group]:
    """Load a previous grouping, a JSON array of name arrays.

    Accepts both a plain array and an object whose values are the groups.

    Raises:
        FileLoadException: If the file is missing or malformed, or a name
            appears more than once
        InvalidParticipantException: If a name is invalid
    """
    path = Path(path)
    data = _read_json(path)
    if isinstance(data, dict):
        data = list(data.values())
    if not isinstance(data, list):
        raise FileLoadException(f"{path} must contain a JSON array of groups")

    groups = []
    seen = set()
    for position, group in enumerate(data, start=1):
        if not isinstance(group, list) or len(group) < 2:
            raise FileLoadException(
                f"{path}, group {position}: expected an array of at least two names"
            )
        names = _clean_names(group, path)
        # A grouping is a partition: nobody may appear twice
        repeated = sorted(
            {name for name in names if name in seen or names.count(name) > 1}
        )
        if repeated:
            raise FileLoadException(
                f"{path}, group {position}: {', '.join(repeated)} already placed"
            )
        seen.update(names)
        groups.append(tuple(names))
    return groups
