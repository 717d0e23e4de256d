from __future__ import annotations

import json

import pytest

from chip8 import MachineConfig


def test_defaults() -> None:
    config = MachineConfig()

    assert config.cycles_per_frame == 16
    assert config.frame_interval == pytest.approx(1 / 60)
    assert config.timer_interval == pytest.approx(1 / 60)
    assert config.stack_depth == 16
    assert config.program_start == 0x200
    assert config.font_offset == 0x50


def test_json_round_trip(tmp_path) -> None:
    path = tmp_path / "machine.json"
    config = MachineConfig(cpu_frequency=700, stack_depth=24, rng_seed=7)

    config.save(str(path))
    raw = json.loads(path.read_text())
    loaded = MachineConfig.load(str(path))

    assert raw["program_start"] == "0x200"
    assert loaded == config


def test_from_dict_ignores_unknown_keys() -> None:
    config = MachineConfig.from_dict({"target_fps": 30, "shader": "crt"})

    assert config.target_fps == 30
    assert config.cycles_per_frame == 33


@pytest.mark.parametrize(
    "overrides",
    [
        {"cpu_frequency": 0},
        {"target_fps": -1},
        {"stack_depth": 0},
        {"program_start": 0x1000},
    ],
)
def test_invalid_values_rejected(overrides) -> None:
    with pytest.raises(ValueError):
        MachineConfig(**overrides)


def test_cpu_slower_than_frame_rate_rejected() -> None:
    with pytest.raises(ValueError, match="below target_fps"):
        MachineConfig(cpu_frequency=30)

    # One instruction per frame is the smallest usable budget.
    assert MachineConfig(cpu_frequency=60).cycles_per_frame == 1


def test_load_rejects_empty_frame_budget(tmp_path) -> None:
    path = tmp_path / "slow.json"
    path.write_text(json.dumps({"cpu_frequency": 30, "target_fps": 60}))

    with pytest.raises(ValueError):
        MachineConfig.load(str(path))
