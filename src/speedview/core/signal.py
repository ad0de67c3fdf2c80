"""
Signal-strength indicator derived from GPS horizontal accuracy.

No radio signal is read: the bar count is a step function of the reported
accuracy radius, tighter fixes light more bars. The thresholds are specific to
phone-grade GPS receivers and are kept fixed for display compatibility.
"""

# (inclusive upper bound in meters, bars lit)
SIGNAL_BAR_THRESHOLDS: tuple[tuple[int, int], ...] = (
    (5, 4),
    (10, 3),
    (20, 2),
    (40, 1),
)

# Bars drawn by the indicator. At most MAX_SIGNAL_BARS of them are ever lit.
SIGNAL_BAR_COUNT = 5
MAX_SIGNAL_BARS = 4


def signal_bars(horizontal_accuracy: float | None) -> int:
    """
    Map horizontal accuracy to a 0-4 bar count.

    Args:
        horizontal_accuracy: Accuracy radius in meters. Truncated toward zero
            before bucketing, so -0.5 counts as 0. None (no fix yet) and
            values that are still negative after truncation light no bars.

    Returns:
        Number of lit bars.
    """
    if horizontal_accuracy is None:
        return 0
    accuracy = int(horizontal_accuracy)
    if accuracy < 0:
        return 0
    for upper_bound, bars in SIGNAL_BAR_THRESHOLDS:
        if accuracy <= upper_bound:
            return bars
    return 0
