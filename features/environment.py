"""behave hooks for the calculator and temperature features.

Override the comparison tolerance with ``-D tolerance=1e-6``.
"""

DEFAULT_TOLERANCE = 1e-9


def before_all(context):
    context.tolerance = float(context.config.userdata.get("tolerance", DEFAULT_TOLERANCE))


def before_scenario(context, scenario):
    """Reset per-scenario state."""
    context.error = None
