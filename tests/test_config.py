from pathlib import Path

import pytest

from partyroulette.config import AppConfig
from partyroulette.engine import ChainClosure, HandoffDirection
from partyroulette.exceptions import InvalidConfigurationException
from partyroulette.models import RemovalPolicy


def test_defaults():
    config = AppConfig.from_env({})

    assert config.data_dir == Path.home() / ".partyroulette"
    assert config.seed is None
    assert config.log_level == "INFO"
    assert config.relay_policy.closure is ChainClosure.OPEN_PATH
    assert config.relay_policy.direction is HandoffDirection.NEWEST_GIVES_TO_PREVIOUS
    assert config.removal_policy is RemovalPolicy.LIVE


def test_from_env(tmp_path):
    config = AppConfig.from_env(
        {
            "PARTYROULETTE_DATA_DIR": str(tmp_path),
            "PARTYROULETTE_SEED": "12",
            "PARTYROULETTE_LOG_LEVEL": "debug",
            "PARTYROULETTE_RELAY_CLOSURE": " Closed ",
            "PARTYROULETTE_REMOVAL_POLICY": "SNAPSHOT",
        }
    )

    assert config.data_dir == tmp_path
    assert config.seed == 12
    assert config.log_level == "DEBUG"
    assert config.relay_policy.closure is ChainClosure.CLOSED_LOOP
    assert config.removal_policy is RemovalPolicy.SNAPSHOT


@pytest.mark.parametrize(
    "environ",
    [
        {"PARTYROULETTE_SEED": "abc"},
        {"PARTYROULETTE_LOG_LEVEL": "chatty"},
        {"PARTYROULETTE_RELAY_CLOSURE": "circle"},
        {"PARTYROULETTE_REMOVAL_POLICY": "never"},
    ],
)
def test_invalid_values_raise(environ):
    with pytest.raises(InvalidConfigurationException):
        AppConfig.from_env(environ)


def test_dict_round_trip(tmp_path):
    config = AppConfig(data_dir=tmp_path, seed=3, removal_policy=RemovalPolicy.SNAPSHOT)

    restored = AppConfig.from_dict(config.to_dict())

    assert restored == config
