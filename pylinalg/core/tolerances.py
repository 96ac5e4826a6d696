"""
Tolerance tiers for numerical comparison.

Defines the precision expectations accepted by Matrix.allclose():
- EXACT: no tolerance at all
- DEFAULT: double-precision round-off after a decomposition
- LOOSE: ill-conditioned problems

Also holds the threshold at which solves emit a near-singularity warning.
"""

from dataclasses import dataclass

from pylinalg.core.exceptions import ValidationError


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='Bit-exact double comparison',
)

DEFAULT = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='default',
    description='Double precision after factorization round-off',
)

# Ill-conditioned problems (cond > 1e4)
LOOSE = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='loose',
    description='Double precision, ill-conditioned',
)

# Smallest/largest |pivot| ratio below which solves warn about
# near-singularity. At 1e-12 roughly four significant digits survive.
NEAR_SINGULAR_RTOL = 1e-12


def select_tolerance(tolerance: ToleranceTier | str) -> ToleranceTier:
    """
    Resolve a tolerance tier given either the tier itself or its name.

    Raises:
        ValidationError: If the name matches no tier
    """
    if isinstance(tolerance, ToleranceTier):
        return tolerance
    tiers = {tier.name: tier for tier in (EXACT, DEFAULT, LOOSE)}
    if tolerance not in tiers:
        raise ValidationError(
            f"tolerance: unknown tolerance tier {tolerance!r}. Available: {sorted(tiers)}"
        )
    return tiers[tolerance]
