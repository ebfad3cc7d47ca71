"""Route view builders."""

from .dashboard import build_dashboard_view
from .viewer import build_viewer_view

__all__ = ["build_dashboard_view", "build_viewer_view"]
