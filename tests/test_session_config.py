import json

import pytest

from partnerpairing.constants import DEFAULT_ITERATIONS
from partnerpairing.exceptions import FileLoadException, InvalidConfigurationException
from partnerpairing.models.session import SessionConfig, load_config


def test_defaults():
    config = SessionConfig()

    assert config.roster_path == "students.json"
    assert config.database_path == "db.sqlite"
    assert config.iterations == DEFAULT_ITERATIONS
    assert config.seed is None
    assert config.save and config.show_matrix


def test_overrides_skip_none():
    config = SessionConfig().with_overrides(iterations=50, seed=None, roster_path="a.txt")

    assert config.iterations == 50
    assert config.seed is None
    assert config.roster_path == "a.txt"


@pytest.mark.parametrize("iterations", [0, -1, "100", 1.5])
def test_invalid_iterations(iterations):
    with pytest.raises(InvalidConfigurationException):
        SessionConfig(iterations=iterations)


def test_invalid_seed():
    with pytest.raises(InvalidConfigurationException):
        SessionConfig(seed="abc")


def test_dict_round_trip():
    config = SessionConfig(iterations=20, seed=3, save=False)

    assert SessionConfig.from_dict(config.to_dict()) == config


def test_unknown_keys_are_rejected():
    with pytest.raises(InvalidConfigurationException, match="iteration"):
        SessionConfig.from_dict({"iteration": 5})


def test_load_config_file(tmp_path):
    path = tmp_path / "pairing.json"
    path.write_text(json.dumps({"iterations": 123, "database_path": "x.sqlite"}))

    config = load_config(path)

    assert config.iterations == 123
    assert config.database_path == "x.sqlite"
    assert config.roster_path == "students.json"


def test_null_values_fall_back_to_defaults(tmp_path):
    path = tmp_path / "pairing.json"
    path.write_text(
        json.dumps({"roster_path": None, "database_path": None, "save": None, "seed": None})
    )

    config = load_config(path)

    assert config.roster_path == "students.json"
    assert config.database_path == "db.sqlite"
    assert config.save
    assert config.seed is None


def test_load_config_errors(tmp_path):
    with pytest.raises(FileLoadException):
        load_config(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{")
    with pytest.raises(FileLoadException):
        load_config(broken)

    listed = tmp_path / "list.json"
    listed.write_text("[]")
    with pytest.raises(InvalidConfigurationException):
        load_config(listed)
