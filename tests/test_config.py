import json
import math

import pytest

from classbracket.config import AppConfig, LayoutConfig, load_config, with_overrides
from classbracket.exceptions import InvalidConfigurationException


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults():
    config = AppConfig()

    assert config.store_path is None
    assert config.log_level == "INFO"
    assert config.layout.center_x == 550
    assert config.layout.center_y == 350
    assert config.layout.base_radius == 1500
    assert config.layout.radius_step == 200
    assert config.layout.start_angle == pytest.approx(-math.pi / 2)


def test_missing_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("CLASSBRACKET_CONFIG", raising=False)

    assert load_config(tmp_path / "nope.json") == AppConfig()
    assert load_config() == AppConfig()


def test_load_partial_config(tmp_path):
    path = _write(
        tmp_path / "config.json",
        {
            "store_path": "class.json",
            "log_level": "debug",
            "layout": {"radius_step": 50},
        },
    )

    config = load_config(path)

    assert str(config.store_path) == "class.json"
    assert config.log_level == "DEBUG"
    assert config.layout.radius_step == 50
    assert config.layout.base_radius == 1500


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = _write(tmp_path / "env.json", {"log_level": "WARNING"})
    monkeypatch.setenv("CLASSBRACKET_CONFIG", str(path))

    assert load_config().log_level == "WARNING"


@pytest.mark.parametrize(
    "content",
    [
        "{broken",
        json.dumps([1, 2, 3]),
        json.dumps({"log_level": "LOUD"}),
        json.dumps({"layout": {"base_radius": 0}}),
        json.dumps({"layout": {"radius_step": -1}}),
        json.dumps({"layout": {"center_x": "left"}}),
        json.dumps({"layout": [1]}),
        json.dumps({"layout": "wide"}),
        json.dumps({"store_path": 5}),
        json.dumps({"store_path": ["class.json"]}),
        json.dumps({"layout": {"base_radius": "nan"}}),
        json.dumps({"layout": {"center_y": "inf"}}),
        json.dumps({"layout": {"start_angle": "-Infinity"}}),
    ],
)
def test_invalid_config_is_rejected(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(InvalidConfigurationException):
        load_config(path)


def test_layout_dict_round_trip():
    layout = LayoutConfig(
        center_x=1, center_y=2, base_radius=3, radius_step=4, start_angle=0
    )

    assert LayoutConfig.from_dict(layout.to_dict()) == layout


def test_command_line_overrides():
    config = AppConfig(log_level="WARNING")

    overridden = with_overrides(config, store_path="class.json", log_level="debug")

    assert str(overridden.store_path) == "class.json"
    assert overridden.log_level == "DEBUG"
    assert with_overrides(config) == config


def test_layout_rejects_non_finite_numbers():
    with pytest.raises(InvalidConfigurationException):
        LayoutConfig(radius_step=math.inf)
    with pytest.raises(InvalidConfigurationException):
        LayoutConfig(center_x=math.nan)
