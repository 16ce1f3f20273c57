"""
Domain Errors
Raised by the summary engines and translated to HTTP status codes by the routes.
"""


class DashboardError(Exception):
    """Base class for dashboard summary errors"""


class EmptyDatasetError(DashboardError):
    """No lower bound was given and there are no records to default it from"""


class InvalidIntervalError(DashboardError, ValueError):
    """Resolved interval start falls after its end"""


class InvalidDiscountKindError(DashboardError, ValueError):
    """Discount code kind is not one the formatter knows"""


class SummaryUnavailableError(DashboardError, RuntimeError):
    """One of the concurrent pipelines failed, so no summary is produced"""
