"""
CreativeGroups Payroll - ESI Calculator Service

Employee State Insurance wage figure: gross salary capped at ₹21,000.
The ESI ceiling is independent of the PF ceiling.
"""

from decimal import Decimal


ESI_WAGE_CEILING = Decimal("21000")


class ESICalculator:
    """ESI wage calculator."""

    @staticmethod
    def wages(gross_salary: Decimal) -> Decimal:
        """Total monthly wages reported on the ESI return."""
        return min(Decimal(gross_salary), ESI_WAGE_CEILING)
