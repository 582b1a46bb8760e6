"""glauber_collider/physics.py

Small, stable physics utilities shared by the nucleon model and the CLI.

Conventions:
- length: fm
- σ_NN inelastic: mb (table, input) and fm^2 (internal)
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass

MB_TO_FM2 = 0.1  # 1 mb = 0.1 fm^2

# Used when neither a cross section nor a beam energy is given (LHC-like).
DEFAULT_CROSS_SECTION_FM2 = 6.4


def mb_to_fm2(sigma_mb: float) -> float:
    """Convert millibarn to fm^2."""
    return MB_TO_FM2 * float(sigma_mb)


@dataclass(frozen=True)
class SigmaNNTable:
    """Anchor points for σ_NN^inel(√s) in mb.

    Not a global PDG fit, just the values commonly used to initialize
    heavy-ion event generators at RHIC and LHC energies.
    """
    anchors_mb: dict

    def sigma_mb(self, sNN_GeV: float) -> float:
        if sNN_GeV in self.anchors_mb:
            return float(self.anchors_mb[sNN_GeV])

        # Interpolate in log(s) vs σ for sanity across decades.
        s = np.array(sorted(self.anchors_mb.keys()), dtype=float)
        sig = np.array([self.anchors_mb[x] for x in s], dtype=float)

        if sNN_GeV < s.min() or sNN_GeV > s.max():
            raise ValueError(
                f"sNN={sNN_GeV} GeV outside sigma table range [{s.min()}, {s.max()}]. "
                "Provide the cross section explicitly."
            )

        xs = np.log(s)
        x = np.log(float(sNN_GeV))
        return float(np.interp(x, xs, sig))

    def sigma_fm2(self, sNN_GeV: float) -> float:
        return mb_to_fm2(self.sigma_mb(sNN_GeV))


DEFAULT_SIGMA_NN = SigmaNNTable(
    anchors_mb={
        # RHIC
        200.0: 42.0,
        # LHC
        2760.0: 62.0,
        5020.0: 67.6,
        8160.0: 71.0,
    }
)
