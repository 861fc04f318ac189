from .service import DashboardOut, StatsService

__all__ = ["DashboardOut", "StatsService"]
