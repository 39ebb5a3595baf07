"""Late fee policy applied when a fee goes overdue."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from college_erp.core.config import Settings
from college_erp.core.enums import LateFeePolicyKind

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class LateFeePolicy:
    kind: LateFeePolicyKind
    flat_amount: Decimal = Decimal("0")
    percentage: Decimal = Decimal("0")

    @classmethod
    def from_settings(cls, config: Settings) -> "LateFeePolicy":
        return cls(
            kind=config.late_fee_policy,
            flat_amount=config.late_fee_flat_amount,
            percentage=config.late_fee_percentage,
        )

    def late_fee_for(self, principal: Decimal) -> Decimal:
        if self.kind == LateFeePolicyKind.FLAT:
            return self.flat_amount.quantize(CENTS, rounding=ROUND_HALF_UP)
        if self.kind == LateFeePolicyKind.PERCENTAGE:
            return (principal * self.percentage / Decimal("100")).quantize(
                CENTS, rounding=ROUND_HALF_UP
            )
        raise ValueError(f"Unknown late fee policy: {self.kind}")
