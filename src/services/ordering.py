"""Gap-based sort order reconciliation.

Clients always resubmit a complete ordering. The proposal is accepted only when
it has as many ids as the live set; anything else is treated as stale and the
current order is kept.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

# Spacing between consecutive sort_order values
SORT_ORDER_GAP = 10


@dataclass(frozen=True)
class ReorderPlan:
    """Result of reconciling a proposed order against the stored one."""

    order: list[str]
    assignments: dict[str, int] = field(default_factory=dict)
    accepted: bool = False


def reconcile_order(current: Sequence[str], proposed: Sequence[str]) -> ReorderPlan:
    """Compute new sort orders for ``current`` from the client's ``proposed`` order.

    Args:
        current: ids of the live set, sorted by their stored sort_order
        proposed: full permutation submitted by the client

    Returns:
        A plan whose ``order`` is the authoritative order to hand back and whose
        ``assignments`` maps each id of ``current`` to its new sort_order. On a
        length mismatch the order is ``current`` and nothing is assigned. Ids in
        ``proposed`` that are not in ``current`` are never assigned.
    """
    if not current:
        return ReorderPlan(order=[])

    if len(proposed) != len(current):
        return ReorderPlan(order=list(current))

    new_orders = {item_id: index * SORT_ORDER_GAP for index, item_id in enumerate(proposed)}
    known = set(current)
    assignments = {
        item_id: sort_order for item_id, sort_order in new_orders.items() if item_id in known
    }
    return ReorderPlan(order=list(proposed), assignments=assignments, accepted=True)
