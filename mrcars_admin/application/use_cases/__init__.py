"""Page use cases: one class per admin page plus the session that drives it."""

from mrcars_admin.application.use_cases.base import Page
from mrcars_admin.application.use_cases.dashboard import DashboardPage
from mrcars_admin.application.use_cases.notifications import NotificationsPage
from mrcars_admin.application.use_cases.resources import (
    RESOURCES,
    PaymentVerificationPage,
    ResourceDefinition,
    ResourcePage,
    build_resource_page,
    get_resource,
)
from mrcars_admin.application.use_cases.session import PageSession

__all__ = [
    "RESOURCES",
    "DashboardPage",
    "NotificationsPage",
    "Page",
    "PageSession",
    "PaymentVerificationPage",
    "ResourceDefinition",
    "ResourcePage",
    "build_resource_page",
    "get_resource",
]
