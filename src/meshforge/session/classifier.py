"""Controller status token to operational category mapping."""

from __future__ import annotations

from meshforge.models.machine import OperationalCategory

# Checked in order, first match wins. Status tokens may combine flags,
# so the order is part of the contract.
_RULES: tuple[tuple[tuple[str, ...], OperationalCategory], ...] = (
    (("idle",), OperationalCategory.IDLE),
    (("run", "jog"), OperationalCategory.RUN),
    (("hold",), OperationalCategory.HOLD),
    (("alarm", "error"), OperationalCategory.ALARM),
)

DISCONNECTED_LABEL = "Disconnected"


def classify(state: str | None) -> OperationalCategory:
    """Classify a raw status token, case-insensitively.

    >>> classify("Hold:0")
    <OperationalCategory.HOLD: 'hold'>
    >>> classify("")
    <OperationalCategory.DISCONNECTED: 'disconnected'>
    """
    text = (state or "").lower()
    for needles, category in _RULES:
        if any(needle in text for needle in needles):
            return category
    return OperationalCategory.DISCONNECTED


def state_label(state: str | None) -> str:
    """Badge text for a status token: the token itself, or ``Disconnected``."""
    return state or DISCONNECTED_LABEL
