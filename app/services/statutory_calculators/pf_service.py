"""
CreativeGroups Payroll - PF Calculator Service

Provident Fund contribution figures for the ECR challan.

PF Rules:
- PF wage ceiling: ₹15,000 (EPS and EDLI wages are capped, EPF wages are not)
- Employee share: 12% of Basic+DA, rounded to the nearest rupee
- EPS (pension) contribution: 8.33% of the capped wages, rounded
- Employer share: the 12% figure less the EPS contribution
- Refund: always 0

Rounding is half-up on whole rupees.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP


# PF constants
PF_WAGE_CEILING = Decimal("15000")
PF_RATE = Decimal("12")
EPS_RATE = Decimal("8.33")


def round_rupees(amount: Decimal) -> int:
    """Round to a whole rupee, ties away from zero."""
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class PFContribution:
    """PF figures for one payroll entry."""
    epf_wages: Decimal
    eps_wages: Decimal
    edli_wages: Decimal
    employee_share: int
    eps_contribution: int
    employer_share: int
    refund: int = 0


class PFCalculator:
    """
    Provident Fund calculator.

    All inputs are Basic+DA for the month as Decimal.
    """

    @staticmethod
    def capped_wages(basic_da: Decimal) -> Decimal:
        """Basic+DA limited to the PF wage ceiling."""
        return min(basic_da, PF_WAGE_CEILING)

    @staticmethod
    def employee_share(basic_da: Decimal) -> int:
        return round_rupees(basic_da * PF_RATE / 100)

    @staticmethod
    def eps_contribution(basic_da: Decimal) -> int:
        capped = PFCalculator.capped_wages(basic_da)
        return round_rupees(capped * EPS_RATE / 100)

    @classmethod
    def calculate(cls, basic_da: Decimal) -> PFContribution:
        """
        Calculate every PF figure for a month's Basic+DA.

        Args:
            basic_da: Basic salary plus dearness allowance

        Returns:
            PFContribution with wages, shares and refund
        """
        basic_da = Decimal(basic_da)
        capped = cls.capped_wages(basic_da)
        employee_share = cls.employee_share(basic_da)
        eps_contribution = cls.eps_contribution(basic_da)

        return PFContribution(
            epf_wages=basic_da,
            eps_wages=capped,
            edli_wages=capped,
            employee_share=employee_share,
            eps_contribution=eps_contribution,
            employer_share=employee_share - eps_contribution,
        )
