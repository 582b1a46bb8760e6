"""glauber_collider/plotting.py

Publication-oriented matplotlib helpers.

Default choices:
- no grid
- no figure titles by default
- clean spines
- consistent fonts/sizes
"""

from __future__ import annotations

import numpy as np
import matplotlib as mpl
import matplotlib.pyplot as plt

from .event import EventResult


def set_pub_style():
    mpl.rcParams.update({
        "figure.figsize": (6.5, 4.2),
        "figure.dpi": 120,
        "savefig.dpi": 300,
        "axes.grid": False,
        "axes.spines.top": False,
        "axes.spines.right": False,
        "legend.frameon": False,
        "font.size": 12,
        "axes.titlesize": 12,
        "axes.labelsize": 12,
        "xtick.labelsize": 11,
        "ytick.labelsize": 11,
        "lines.linewidth": 2.0,
        "mathtext.fontset": "stix",
    })


def style_ax(ax):
    ax.grid(False)
    ax.set_title("")
    for spine in ("top", "right"):
        ax.spines[spine].set_visible(False)


def add_panel_label(ax, label: str, *, x: float = 0.02, y: float = 0.98):
    ax.text(x, y, label, transform=ax.transAxes, ha="left", va="top", fontsize=12, fontweight="bold")


def plot_reduced_thickness(ax, result: EventResult, grid_max: float):
    """Heat map of T_R(x,y) for one event."""
    im = ax.imshow(
        result.reduced_thickness,
        origin="lower",
        extent=(-grid_max, grid_max, -grid_max, grid_max),
        cmap="inferno",
    )
    ax.set_xlabel(r"$x$ [fm]")
    ax.set_ylabel(r"$y$ [fm]")
    plt.colorbar(im, ax=ax, label=r"$T_R$ [fm$^{-2}$]")
    return im


def plot_impact_parameter(ax, b_values, bmin: float, bmax: float, *, bins: int = 30):
    """Histogram of sampled b against the geometric density 2b/(bmax^2 - bmin^2).

    The overlay is the distribution of *drawn* b; accepted events fall below
    it at large b where the trigger rejects trials.
    """
    b_values = np.asarray(b_values, dtype=float)
    ax.hist(b_values, bins=bins, range=(bmin, bmax), density=True, histtype="step", label="sampled")
    b = np.linspace(bmin, bmax, 200)
    if bmax > bmin:
        ax.plot(b, 2.0 * b / (bmax ** 2 - bmin ** 2), ls="--", label=r"$2b/(b_{max}^2-b_{min}^2)$")
    ax.set_xlabel(r"$b$ [fm]")
    ax.set_ylabel(r"$dP/db$ [fm$^{-1}$]")
    ax.legend()
    style_ax(ax)
