"""
Air Monitoring Sample Rules

This package provides equipment eligibility and air sample validity rules
for occupational-hygiene air monitoring.
"""

__version__ = "0.1.0"
__description__ = "Air sample validity and equipment eligibility rules"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "AirMonitoringApp":
        from .main import AirMonitoringApp
        return AirMonitoringApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AirMonitoringApp",
]
