"""HTML page shells (landing, login, dashboard)."""

from mrcars_admin.pages.root import (
    render_dashboard_page,
    render_login_page,
    render_root_page,
)

__all__ = ["render_dashboard_page", "render_login_page", "render_root_page"]
