"""SessionConfig data class."""

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

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from partnerpairing.constants import (
    DEFAULT_DATABASE_PATH,
    DEFAULT_ITERATIONS,
    DEFAULT_ROSTER_PATH,
)
from partnerpairing.exceptions import FileLoadException, InvalidConfigurationException
from partnerpairing.utils.validation import validate_iterations


@dataclass
class SessionConfig:
    """Settings for generating and recording a pairing session.

    Attributes
    ----------
    roster_path : str
        File listing the participants (JSON array or one name per line).
    database_path : str
        SQLite file holding the pairing history.
    iterations : int
        Number of random candidate partitions to try.
    seed : int or None
        Seed for the random source; None draws a fresh seed.
    save : bool
        Whether the winning pairs are written to the history.
    show_matrix : bool
        Whether the encounter matrix is printed after the groups.
    """

    roster_path: str = DEFAULT_ROSTER_PATH
    database_path: str = DEFAULT_DATABASE_PATH
    iterations: int = DEFAULT_ITERATIONS
    seed: Optional[int] = None
    save: bool = True
    show_matrix: bool = True

    def __post_init__(self) -> None:
        result = validate_iterations(self.iterations)
        if not result:
            raise InvalidConfigurationException(result.error_message)
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int)
        ):
            raise InvalidConfigurationException(
                f"Seed must be an integer, got {self.seed!r}"
            )

    def with_overrides(self, **overrides: Any) -> "SessionConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "roster_path": self.roster_path,
            "database_path": self.database_path,
            "iterations": self.iterations,
            "seed": self.seed,
            "save": self.save,
            "show_matrix": self.show_matrix,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """Deserialize configuration from dictionary."""
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise InvalidConfigurationException(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            )
        # null in a config file means "use the default"
        data = {key: value for key, value in data.items() if value is not None}
        return cls(
            roster_path=str(data.get("roster_path", DEFAULT_ROSTER_PATH)),
            database_path=str(data.get("database_path", DEFAULT_DATABASE_PATH)),
            iterations=data.get("iterations", DEFAULT_ITERATIONS),
            seed=data.get("seed"),
            save=bool(data.get("save", True)),
            show_matrix=bool(data.get("show_matrix", True)),
        )


def load_config(path: Union[str, Path]) -> SessionConfig:
    """Read a :class:`SessionConfig` from a JSON file.

    Raises:
        FileLoadException: If the file cannot be read or is not valid JSON
        InvalidConfigurationException: If the values are invalid
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise FileLoadException(f"Cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise FileLoadException(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigurationException(
            f"Config file {path} must contain a JSON object"
        )
    return SessionConfig.from_dict(data)
