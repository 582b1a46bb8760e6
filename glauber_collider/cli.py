"""glauber_collider/cli.py

Command line interface: glauber-collider PROJECTILE PROJECTILE [options].
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Optional

from .config import ColliderConfig, build_collider
from .nucleon import INTERACTION_MODELS
from .output import Output

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="glauber-collider",
        description="Sample minimum-bias nuclear collision events",
    )
    parser.add_argument("projectiles", nargs=2, metavar="PROJECTILE", help="Nucleus species: p, d, Cu, Au, Pb, U")
    parser.add_argument("-n", "--number-events", type=int, default=1, help="Number of events")
    parser.add_argument("--b-min", type=float, default=0.0, help="Minimum impact parameter [fm]")
    parser.add_argument("--b-max", type=float, default=-1.0, help="Maximum impact parameter [fm] (negative: derive)")
    parser.add_argument("--random-seed", type=int, default=0, help="Random seed (<= 0: not reproducible)")
    parser.add_argument("--ncoll", action="store_true", help="Count binary collisions")
    parser.add_argument("--trials", action="store_true", help="Count impact-parameter trials per event")

    nucleon = parser.add_argument_group("nucleon interaction")
    nucleon.add_argument("-x", "--cross-section", type=float, default=None, help="Inelastic σ_NN [fm^2]")
    nucleon.add_argument("--sqrt-s", type=float, default=None, help="Beam energy √s_NN [GeV] for the σ_NN table")
    nucleon.add_argument("-w", "--nucleon-width", type=float, default=0.5, help="Gaussian nucleon width [fm]")
    nucleon.add_argument("--interaction", choices=INTERACTION_MODELS, default="gaussian", help="Pair interaction model")

    nuclear = parser.add_argument_group("nuclear structure")
    nuclear.add_argument("-d", "--nucleon-min-dist", type=float, default=0.0, help="Minimum nucleon distance [fm]")
    nuclear.add_argument("--surface-thickness", type=float, default=0.0, help="Woods–Saxon diffuseness override [fm]")
    nuclear.add_argument("--beta2-mean", type=float, default=None, help="Quadrupole deformation mean")
    nuclear.add_argument("--beta2-std", type=float, default=0.0, help="Quadrupole deformation spread")
    nuclear.add_argument("--gamma-mean", type=float, default=0.0, help="Triaxiality mean [rad]")
    nuclear.add_argument("--gamma-std", type=float, default=0.0, help="Triaxiality spread [rad]")
    nuclear.add_argument("--beta3", type=float, default=0.0, help="Octupole deformation")
    nuclear.add_argument("--beta4", type=float, default=None, help="Hexadecapole deformation")

    event = parser.add_argument_group("event profile")
    event.add_argument("-p", "--reduced-thickness", type=float, default=0.0, help="Reduced thickness parameter p")
    event.add_argument("-k", "--fluctuation", type=float, default=1.0, help="Gamma fluctuation shape k (<= 0: off)")
    event.add_argument("--normalization", type=float, default=1.0, help="Overall normalization")
    event.add_argument("--grid-max", type=float, default=10.0, help="Grid half-width [fm]")
    event.add_argument("--grid-step", type=float, default=0.2, help="Grid cell size [fm]")

    parser.add_argument("-q", "--quiet", action="store_true", help="Do not print event lines")
    parser.add_argument("--plot", type=str, default=None, help="Save the b distribution figure to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Shorthand for --log-level DEBUG")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> ColliderConfig:
    return ColliderConfig(
        projectiles=tuple(args.projectiles),
        nevents=args.number_events,
        bmin=args.b_min,
        bmax=args.b_max,
        random_seed=args.random_seed,
        track_ncoll=args.ncoll,
        track_trials=args.trials,
        interaction=args.interaction,
        cross_section=args.cross_section,
        sqrt_s=args.sqrt_s,
        nucleon_width=args.nucleon_width,
        nucleon_min_dist=args.nucleon_min_dist,
        surface_thickness=args.surface_thickness,
        beta2_mean=args.beta2_mean,
        beta2_std=args.beta2_std,
        gamma_mean=args.gamma_mean,
        gamma_std=args.gamma_std,
        beta3=args.beta3,
        beta4=args.beta4,
        reduced_thickness=args.reduced_thickness,
        fluctuation=args.fluctuation,
        normalization=args.normalization,
        grid_max=args.grid_max,
        grid_step=args.grid_step,
    )


def _save_b_plot(path: str, output: Output, bmin: float, bmax: float, *, label: str) -> None:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    from .plotting import add_panel_label, plot_impact_parameter, set_pub_style

    set_pub_style()
    fig, ax = plt.subplots()
    plot_impact_parameter(ax, [r.b for r in output.records], bmin, bmax)
    add_panel_label(ax, label)
    fig.savefig(path, bbox_inches="tight")
    plt.close(fig)
    logger.info("saved b distribution to %s", path)


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    output = Output(quiet=args.quiet, keep=args.plot is not None)
    try:
        collider = build_collider(config_from_args(args), output=output)
    except ValueError as exc:
        logger.error("invalid configuration: %s", exc)
        return 2

    collider.run_events()

    if args.plot:
        label = "+".join(args.projectiles)
        _save_b_plot(args.plot, output, collider.run.bmin, collider.run.bmax, label=label)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
