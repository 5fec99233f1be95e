"""
Exceptions raised by the Weekly Planner export facade.
"""


class InvalidPlanShape(ValueError):
    """The plan is missing weekday slots or week metadata.

    Raised before any rendering starts. ``problems`` lists every issue
    found, not just the first.
    """

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("Invalid weekly plan: " + "; ".join(self.problems))


class RenderFailed(RuntimeError):
    """Rendering aborted; no output bytes were produced."""

    def __init__(self, fmt, reason):
        self.fmt = fmt
        self.reason = reason
        super().__init__(f"Failed to render {fmt} export: {reason}")
