"""Health evaluation of a node's finalization lag."""

from decimal import ROUND_HALF_UP, Decimal, localcontext

from .models import ChainSnapshot, HealthVerdict

TWO_PLACES: Decimal = Decimal("0.01")


def calculate_sync_percentage(finalized: int, latest: int) -> Decimal:
    """
    Compute finalized/latest as a percentage rounded half-up to 2 decimals.

    Returns ``Decimal("0.00")`` when latest is 0.
    """
    if latest == 0:
        return Decimal("0.00")

    with localcontext() as ctx:
        # Enough precision to keep arbitrarily large heights exact
        ctx.prec = max(28, len(str(abs(finalized))) + len(str(abs(latest))) + 10)
        ratio = Decimal(finalized) * 100 / Decimal(latest)
        return ratio.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def evaluate_health(latest: int, finalized: int, max_gap: int) -> HealthVerdict:
    """
    Judge a node's finalization lag against the allowed maximum.

    A negative gap (finalized ahead of latest, from the two reads racing
    the chain) is not clamped and is never healthy.
    """
    gap = latest - finalized
    return HealthVerdict(
        gap=gap,
        sync_percentage=calculate_sync_percentage(finalized, latest),
        is_healthy=0 <= gap <= max_gap,
        max_allowed_gap=max_gap
    )


class HealthEvaluator:
    """Evaluates snapshots against a fixed maximum allowed gap."""

    def __init__(self, max_allowed_gap: int) -> None:
        self.max_allowed_gap: int = max_allowed_gap

    def evaluate(self, snapshot: ChainSnapshot) -> HealthVerdict:
        return evaluate_health(
            snapshot.latest_block,
            snapshot.finalized_block,
            self.max_allowed_gap
        )
