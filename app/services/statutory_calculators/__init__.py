"""
CreativeGroups Payroll - Statutory Calculators Package

Statutory figures for Indian PF and ESI returns.

Modules:
- pf_service: PF wages and contribution shares (₹15,000 ceiling, 12% / 8.33%)
- esi_service: ESI wages (₹21,000 ceiling)
"""

from decimal import Decimal
from typing import Union

from app.services.statutory_calculators.pf_service import (
    PFCalculator,
    PFContribution,
    PF_WAGE_CEILING,
    PF_RATE,
    EPS_RATE,
    round_rupees,
)
from app.services.statutory_calculators.esi_service import ESICalculator, ESI_WAGE_CEILING


# ===========================================
# CONVENIENCE FUNCTIONS
# ===========================================

def calculate_pf_contribution(basic_da: Decimal) -> PFContribution:
    """
    Calculate PF figures for a month's Basic+DA.

    Example:
        Basic+DA ₹20,000 gives wages 20000/15000/15000 and
        shares 2400 (employee), 1250 (EPS), 1150 (employer).
    """
    return PFCalculator.calculate(basic_da)


def esi_wages(gross_salary: Decimal) -> Decimal:
    """Gross salary capped at the ESI ceiling."""
    return ESICalculator.wages(gross_salary)


def compute_ncp(total_days: Union[int, Decimal], working_days: Decimal) -> Decimal:
    """
    Non contributing period for a month.

    Never negative: over-reported attendance clamps to 0.
    """
    ncp = Decimal(total_days) - Decimal(working_days)
    return max(Decimal("0"), ncp)


__all__ = [
    "PFCalculator",
    "PFContribution",
    "ESICalculator",
    "PF_WAGE_CEILING",
    "PF_RATE",
    "EPS_RATE",
    "ESI_WAGE_CEILING",
    "round_rupees",
    "calculate_pf_contribution",
    "esi_wages",
    "compute_ncp",
]
