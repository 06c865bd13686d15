"""Service availability checks."""

from .status import get_wizard_services_status

__all__ = ["get_wizard_services_status"]
