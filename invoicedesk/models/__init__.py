"""
Domain model package. Import all models here so stores and services can
reach every entity from one place.
"""
from invoicedesk.models.user import User  # noqa: F401
from invoicedesk.models.invoice import Invoice  # noqa: F401
from invoicedesk.models.notification import Notification  # noqa: F401
