"""Tests for configuration, output and the command line."""

from __future__ import annotations

import io
import logging

import pytest

from glauber_collider.cli import main
from glauber_collider.config import ColliderConfig, build_collider
from glauber_collider.event import EventResult
from glauber_collider.nucleon import BlackDiskNucleonCommon, GaussianNucleonCommon
from glauber_collider.nucleus import Deuteron, WoodsSaxonNucleus
from glauber_collider.output import EventRecord, Output
from glauber_collider.physics import DEFAULT_CROSS_SECTION_FM2


@pytest.mark.parametrize(
    "kwargs, message",
    [
        (dict(nevents=-1), "number of events"),
        (dict(bmin=-1.0), "bmin"),
        (dict(projectiles=("Pb",)), "two projectiles"),
        (dict(nucleon_width=0.0), "nucleon width"),
        (dict(grid_step=-0.1), "grid"),
        (dict(interaction="soft"), "interaction"),
    ],
)
def test_invalid_config(kwargs, message):
    with pytest.raises(ValueError, match=message):
        build_collider(ColliderConfig(**kwargs))


def test_bmax_below_bmin_after_derivation():
    with pytest.raises(ValueError, match="bmax"):
        build_collider(ColliderConfig(projectiles=("p", "p"), bmin=5.0))


def test_cross_section_resolution():
    assert ColliderConfig(cross_section=5.0).resolved_cross_section() == 5.0
    assert ColliderConfig(sqrt_s=200.0).resolved_cross_section() == pytest.approx(4.2)
    assert ColliderConfig().resolved_cross_section() == DEFAULT_CROSS_SECTION_FM2


def test_build_collider_wires_collaborators():
    collider = build_collider(ColliderConfig(projectiles=("d", "Au"), interaction="black-disk", random_seed=3))
    assert isinstance(collider.nucleus_a, Deuteron)
    assert isinstance(collider.nucleus_b, WoodsSaxonNucleus)
    assert isinstance(collider.nucleon_common, BlackDiskNucleonCommon)
    expected = collider.nucleus_a.radius() + collider.nucleus_b.radius() + collider.nucleon_common.max_impact()
    assert collider.run.bmax == pytest.approx(expected)


def test_fluctuated_deformation_drawn_per_nucleus():
    config = ColliderConfig(projectiles=("U", "U"), beta2_mean=0.28, beta2_std=0.05, random_seed=9)
    collider = build_collider(config)
    assert isinstance(collider.nucleon_common, GaussianNucleonCommon)
    assert collider.nucleus_a.p.beta2 != collider.nucleus_b.p.beta2
    assert build_collider(config).nucleus_a.p.beta2 == collider.nucleus_a.p.beta2


def test_deformation_spread_about_species_default():
    u = build_collider(ColliderConfig(projectiles=("U", "U"), beta2_std=0.05, random_seed=9))
    assert u.nucleus_a.p.beta2 != u.nucleus_b.p.beta2
    assert u.nucleus_a.p.beta2 != 0.28 and u.nucleus_b.p.beta2 != 0.28

    pb = build_collider(ColliderConfig(projectiles=("Pb", "p"), beta2_std=0.05, random_seed=9))
    assert pb.nucleus_a.p.beta2 != 0.0
    assert pb.nucleus_a.p.deformed


def test_output_line_and_record():
    stream = io.StringIO()
    out = Output(stream)
    event = EventResult(npart=4, multiplicity=12.5, eccentricity={2: 0.1, 3: 0.2, 4: 0.3, 5: 0.4}, reduced_thickness=None)
    out(7, 3.25, 2, 1, event)

    fields = stream.getvalue().split()
    assert fields[:5] == ["7", "3.2500", "4", "2", "1"]
    assert float(fields[5]) == 12.5
    assert [float(f) for f in fields[6:]] == [0.1, 0.2, 0.3, 0.4]
    assert out.records == [EventRecord(7, 3.25, 2, 1, 4, 12.5, {2: 0.1, 3: 0.2, 4: 0.3, 5: 0.4})]


def test_quiet_output_keeps_records():
    stream = io.StringIO()
    out = Output(stream, quiet=True)
    out(0, 1.0, 0, 0, EventResult(npart=2, multiplicity=1.0, eccentricity={2: 0, 3: 0, 4: 0, 5: 0}, reduced_thickness=None))
    assert stream.getvalue() == ""
    assert len(out.records) == 1


def test_cli_runs_events(capsys):
    code = main(["p", "Pb", "-n", "3", "--random-seed", "5", "--ncoll", "--trials", "--grid-max", "5", "--grid-step", "0.5"])
    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    for i, line in enumerate(lines):
        fields = line.split()
        assert len(fields) == 10
        assert int(fields[0]) == i
        assert int(fields[3]) >= 1  # ncoll
        assert int(fields[4]) >= 1  # trials


def test_cli_without_tracking_reports_zero_counters(capsys):
    assert main(["p", "p", "-n", "2", "--random-seed", "1", "--grid-max", "3", "--grid-step", "0.5"]) == 0
    for line in capsys.readouterr().out.splitlines():
        assert line.split()[3:5] == ["0", "0"]


def test_cli_rejects_invalid_config(caplog):
    with caplog.at_level(logging.ERROR, logger="glauber_collider.cli"):
        assert main(["p", "p", "--b-min", "-1"]) == 2
    assert "invalid configuration: bmin must be non-negative" in caplog.text


def test_cli_plot(tmp_path, capsys, monkeypatch):
    labels = []
    monkeypatch.setattr("glauber_collider.plotting.add_panel_label", lambda ax, label, **kw: labels.append(label))
    path = tmp_path / "b.png"
    assert main(["d", "Cu", "-n", "4", "-q", "--random-seed", "2", "--grid-max", "4", "--grid-step", "0.5", "--plot", str(path)]) == 0
    assert path.exists()
    assert labels == ["d+Cu"]
    assert capsys.readouterr().out == ""


def test_plot_helpers(tmp_path):
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    import numpy as np

    from glauber_collider.plotting import add_panel_label, plot_impact_parameter, plot_reduced_thickness, set_pub_style

    set_pub_style()
    result = EventResult(npart=2, multiplicity=1.0, eccentricity={2: 0, 3: 0, 4: 0, 5: 0}, reduced_thickness=np.ones((8, 8)))
    fig, (ax1, ax2) = plt.subplots(1, 2)
    plot_reduced_thickness(ax1, result, grid_max=4.0)
    plot_impact_parameter(ax2, np.sqrt(np.random.default_rng(0).random(200)) * 3.0, 0.0, 3.0)
    add_panel_label(ax2, "(b)")
    fig.savefig(tmp_path / "panels.png")
    plt.close(fig)
    assert (tmp_path / "panels.png").exists()
