"""Helper utility functions."""


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def ease_out_quad(t: float) -> float:
    """Quadratic ease-out function for animations."""
    return 1 - (1 - t) ** 2
