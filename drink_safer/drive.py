"""Drive-safety guidance from an estimated BAC.

Three tiers on half-open intervals: [0, 0.03) safe, [0.03, 0.08) caution,
[0.08, inf) unsafe. The gauge colours use the same thresholds.
"""

CAUTION_BAC = 0.03
LEGAL_LIMIT_BAC = 0.08

SAFE = "safe"
CAUTION = "caution"
UNSAFE = "unsafe"

MESSAGES = {
    SAFE: "You are safe to drive.",
    CAUTION: "Be cautious. Limit your intake.",
    UNSAFE: "Do not drive. Consider slowing down your intake.",
}


def tier_for(bac: float) -> str:
    if bac < CAUTION_BAC:
        return SAFE
    if bac < LEGAL_LIMIT_BAC:
        return CAUTION
    return UNSAFE


def classify(bac: float) -> dict:
    """Return ``{"tier", "message"}`` for the current BAC."""
    tier = tier_for(bac)
    return {"tier": tier, "message": MESSAGES[tier]}
