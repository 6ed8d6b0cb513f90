import csv
import os

import numpy as np
import pytest

from daisyworld import run
from daisyworld.config import SimulationConfig
from daisyworld.engine import SimulationEngine
from daisyworld.grid import Grid
from daisyworld.patch import Patch
from daisyworld.renderer import PATCH_COLORS, kind_rgb_array, render_ascii, render_ppm
from daisyworld.simulation import _summarize, frame_path, run_simulation, write_csv
from daisyworld.window import panel_lines

SMALL = SimulationConfig(width=12, height=10)


def test_run_simulation_returns_one_stats_per_tick():
    stats = run_simulation(steps=6, seed=3, config=SMALL, log_every=0, summary=False)
    assert [s.tick for s in stats] == [1, 2, 3, 4, 5, 6]
    assert all(s.black + s.white + s.empty == 120 for s in stats)


def test_run_simulation_is_reproducible():
    a = run_simulation(steps=8, seed=5, config=SMALL, log_every=0, summary=False)
    b = run_simulation(steps=8, seed=5, config=SMALL, log_every=0, summary=False)
    assert a == b


def test_run_simulation_writes_csv_and_summary(tmp_path, capsys):
    csv_path = tmp_path / "stats.csv"
    run_simulation(steps=4, seed=1, config=SMALL, log_every=2, csv_path=str(csv_path))

    with open(csv_path, newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert len(rows) == 4
    assert rows[-1]["tick"] == "4"
    assert {"temperature", "luminosity", "black", "white", "empty"} <= set(rows[0])

    out = capsys.readouterr().out
    assert "tick=2 " in out
    assert "tick=4 " in out
    assert "summary:" in out


def test_run_simulation_renders_frames(tmp_path, capsys):
    run_simulation(
        steps=4,
        seed=1,
        config=SMALL,
        log_every=0,
        summary=False,
        render_every=2,
        render_path=str(tmp_path / "frames"),
        render_ascii_enabled=True,
        render_scale=2,
    )
    assert sorted(p.name for p in (tmp_path / "frames").iterdir()) == ["tick_000002.ppm", "tick_000004.ppm"]
    out = capsys.readouterr().out
    assert len(out.strip().splitlines()) == 2 * 10


def test_summarize_empty_and_values():
    assert _summarize([])["steps"] == 0
    stats = run_simulation(steps=3, seed=2, config=SMALL, log_every=0, summary=False)
    summary = _summarize(stats)
    assert summary["steps"] == 3
    assert summary["final_black"] == stats[-1].black
    assert summary["min_temp"] <= summary["avg_temp"] <= summary["max_temp"]


def test_render_ascii_maps_kinds():
    grid = Grid.from_rows([[0, 1, 2], [2, 1, 0]])
    assert render_ascii(grid) == ".#o\no#."


def test_render_ascii_downscales_large_grids():
    text = render_ascii(Grid(240, 120), max_width=120, max_height=60)
    lines = text.splitlines()
    assert len(lines) == 60
    assert all(len(line) == 120 for line in lines)


def test_kind_rgb_array():
    grid = Grid(3, 2)
    grid.set(2, 1, Patch.WHITE_DAISY)
    image = kind_rgb_array(grid)
    assert image.shape == (2, 3, 3)
    assert image.dtype == np.uint8
    assert tuple(image[1, 2]) == PATCH_COLORS[Patch.WHITE_DAISY]
    assert tuple(image[0, 0]) == PATCH_COLORS[Patch.EMPTY]


def test_render_ppm(tmp_path):
    grid = Grid(3, 2, fill=Patch.BLACK_DAISY)
    path = tmp_path / "grid.ppm"
    render_ppm(grid, str(path), scale=2)
    lines = path.read_text(encoding="ascii").splitlines()
    assert lines[:3] == ["P3", "6 4", "255"]
    assert len(lines) == 3 + 4
    assert lines[3].split() == ["0"] * 18


def test_panel_lines_show_counters():
    engine = SimulationEngine(SMALL, seed=4)
    lines = panel_lines(engine.step())
    assert lines[0] == "Tick: 1"
    assert lines[1].startswith("Global Temp: ")
    assert lines[3] == f"Black Daisies: {engine.black_count}"
    assert lines[4] == f"White Daisies: {engine.white_count}"


def test_cli_runs_headless(tmp_path, monkeypatch, capsys):
    for key in list(os.environ):
        if key.startswith("DAISYWORLD_"):
            monkeypatch.delenv(key)
    csv_path = tmp_path / "out.csv"
    code = run.main([
        "--steps", "3", "--width", "8", "--height", "6", "--seed", "3",
        "--log-every", "0", "--csv", str(csv_path),
    ])
    assert code == 0
    assert csv_path.exists()
    assert "summary:" in capsys.readouterr().out


def test_cli_rejects_bad_settings(capsys):
    assert run.main(["--steps", "1", "--pollen-chance", "2.0"]) == 2
    assert "pollen_conversion_chance" in capsys.readouterr().err


def test_plot_history(tmp_path):
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    from daisyworld.viewer import plot_history

    stats = run_simulation(steps=5, seed=1, config=SMALL, log_every=0, summary=False)
    path = tmp_path / "history.png"
    plot_history(stats, str(path))
    assert path.stat().st_size > 0


def test_write_csv_keeps_header_for_empty_run(tmp_path):
    path = tmp_path / "empty.csv"
    write_csv([], str(path))
    with open(path, newline="") as handle:
        rows = list(csv.reader(handle))
    assert rows == [["tick", "luminosity", "temperature", "average_albedo",
                     "black", "white", "empty", "conversions"]]


def test_frame_path_forms():
    assert frame_path("out/{tick}.ppm", 7) == "out/7.ppm"
    assert frame_path("single.PPM", 7) == "single.PPM"
    assert frame_path("frames", 7) == os.path.join("frames", "tick_000007.ppm")


@pytest.mark.parametrize("viewer", ["matplotlib", "pygame"])
@pytest.mark.parametrize(
    "render_flags",
    [["--render-ascii"], ["--render-every", "2"], ["--render-path", "frames"]],
)
def test_cli_rejects_frame_rendering_with_a_viewer(viewer, render_flags, capsys):
    assert run.main(["--steps", "1", "--viewer", viewer] + render_flags) == 2
    assert "--viewer none" in capsys.readouterr().err


def test_cli_pygame_viewer_writes_csv_and_plot(tmp_path, monkeypatch):
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    from daisyworld import window

    for key in list(os.environ):
        if key.startswith("DAISYWORLD_"):
            monkeypatch.delenv(key)

    def fake_run_window(seed=None, sim_config=None, max_steps=None, **_):
        engine = SimulationEngine(sim_config, seed=seed)
        return [engine.stats()] + [engine.step() for _ in range(max_steps)]

    monkeypatch.setattr(window, "run_window", fake_run_window)
    csv_path = tmp_path / "window.csv"
    plot_path = tmp_path / "window.png"
    code = run.main([
        "--steps", "3", "--width", "8", "--height", "6", "--seed", "2",
        "--viewer", "pygame", "--csv", str(csv_path), "--plot", str(plot_path),
    ])
    assert code == 0
    with open(csv_path, newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert [row["tick"] for row in rows] == ["0", "1", "2", "3"]
    assert plot_path.stat().st_size > 0
