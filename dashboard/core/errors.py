from typing import List, Optional


class DashboardError(Exception):
    """Base for every failure that ends up as an alert on a screen."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BackendError(DashboardError):
    """The document store or the network under it failed."""

    status_code = 502


class OperationFailed(DashboardError):
    status_code = 502


class FormValidationError(DashboardError):
    status_code = 422

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = list(fields or [])


class RecordNotFound(DashboardError):
    status_code = 404


class ScreenNotFound(DashboardError):
    status_code = 404


class FormStateError(DashboardError):
    status_code = 409
