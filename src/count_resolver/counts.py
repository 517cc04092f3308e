"""
In-memory counts store.

Applies committed mutations to canonical items. SUBTRACT floors at zero and
ERASE always zeroes. Only AUTO_COMMIT decisions (or mutations the caller
has confirmed explicitly) are applied.
"""
import logging
from typing import Dict, Iterable, Optional

from .exceptions import InvalidMutationError
from .models import UNMAPPED, DecisionState, Operation, ResolutionDecision, normalize_text

logger = logging.getLogger(__name__)


class CountLedger:
    """
    Counts per canonical item for one counting session.
    
    Usage:
        ledger = CountLedger(["RIBS", "CHICKEN"])
        ledger.apply(Operation.ADD, "RIBS", 5)
        ledger.counts  # {"RIBS": 5, "CHICKEN": 0}
    """

    def __init__(self, canonical_items: Iterable[str], counts: Optional[Dict[str, int]] = None):
        self._items = {}
        for item in canonical_items:
            self._items.setdefault(normalize_text(item), item)

        if not self._items:
            raise InvalidMutationError("CountLedger needs at least one canonical item")

        self._counts: Dict[str, int] = {item: 0 for item in self._items.values()}
        for item, value in (counts or {}).items():
            self._counts[self._canonical(item)] = max(0, int(value))

    @property
    def counts(self) -> Dict[str, int]:
        return dict(self._counts)

    def get(self, item: str) -> int:
        return self._counts[self._canonical(item)]

    def _canonical(self, item: str) -> str:
        if not isinstance(item, str) or item == UNMAPPED:
            raise InvalidMutationError(f"Cannot count unmapped item {item!r}")
        try:
            return self._items[normalize_text(item)]
        except KeyError:
            raise InvalidMutationError(f"Unknown item {item!r}; not in canonical list")

    def apply(self, operation: Operation, item: str, value: Optional[int]) -> int:
        """
        Apply one mutation.
        
        :param operation: Operation to apply
        :param item: Canonical item name
        :param value: Quantity (ignored for ERASE)
        :return: The item's new count
        :raises InvalidMutationError: For unknown items or missing/negative values
        """
        canonical = self._canonical(item)
        current = self._counts[canonical]

        if operation is Operation.ERASE:
            updated = 0
        else:
            if value is None or value < 0:
                raise InvalidMutationError(f"{operation.value} needs a non-negative value, got {value!r}")
            if operation is Operation.ADD:
                updated = current + value
            elif operation is Operation.SUBTRACT:
                updated = max(0, current - value)
            elif operation is Operation.SET:
                updated = value
            else:
                raise InvalidMutationError(f"Unsupported operation {operation!r}")

        self._counts[canonical] = updated
        logger.info(f"[Counts] {operation.value} {value} {canonical}: {current} -> {updated}")
        return updated

    def apply_decision(self, decision: ResolutionDecision) -> int:
        """
        Apply an auto-committed decision.
        
        :raises InvalidMutationError: If the decision is not AUTO_COMMIT
        """
        if decision.decision_state is not DecisionState.AUTO_COMMIT:
            raise InvalidMutationError(
                f"Refusing to apply a {decision.decision_state.value} decision; confirm it first"
            )
        return self.apply(decision.operation, decision.canonical_item, decision.value)
