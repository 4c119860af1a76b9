"""Tests for the orbitcam-sim entry point."""

import json
import math

import pytest

from orbitcam.config.io import read_preset
from orbitcam.core.main import build_default_rig, main


def read_records(capsys):
    out = capsys.readouterr().out
    return [json.loads(line) for line in out.splitlines() if line.strip()]


class TestMain:
    """Run the simulator in-process."""

    def test_idle_run_prints_one_record_per_tick(self, capsys):
        assert main(ticks=3) == 0
        records = read_records(capsys)

        assert [r["tick"] for r in records] == [0, 1, 2]
        assert all(r["moved"] == [] for r in records)
        pose = records[-1]["poses"]["main"]
        assert pose["position"] == [0.0, 0.0, 5.0]
        assert pose["orientation"] == pytest.approx([1.0, 0.0, 0.0, 0.0])

    def test_scroll_zooms_in(self, capsys):
        assert main(ticks=2, scroll=1.0) == 0
        records = read_records(capsys)
        assert records[0]["moved"] == ["main"]
        assert records[-1]["poses"]["main"]["position"][2] == pytest.approx(5.0 * 0.8 * 0.8)

    def test_drag_with_rotate_orbits(self, capsys):
        assert main(ticks=1, dt=0.016, drag=(100.0, 0.0), rotate=True) == 0
        x, y, z = read_records(capsys)[0]["poses"]["main"]["position"]
        assert x == pytest.approx(-5.0 * math.sin(0.128))
        assert z == pytest.approx(5.0 * math.cos(0.128))

    def test_save_and_reload(self, capsys, temp_dir):
        path = temp_dir / "out.yaml"
        assert main(ticks=1, auto_rotate=0.5, save=path) == 0
        cameras, automatic_rotation = read_preset(path)
        assert automatic_rotation.enabled
        assert automatic_rotation.sensitivity == 0.5

        capsys.readouterr()
        assert main(path, ticks=1) == 0
        assert read_records(capsys)[0]["moved"] == ["main"]

    def test_missing_preset_fails(self, temp_dir, capsys):
        assert main(temp_dir / "missing.yaml", ticks=1) == 1
        assert capsys.readouterr().out == ""

    def test_unknown_camera_fails(self):
        assert main(ticks=1, camera="nope") == 1


def test_build_default_rig():
    rig = build_default_rig(auto_rotate=None)
    assert [c.name for c in rig.cameras] == ["main"]
    assert not rig.automatic_rotation.config.enabled
