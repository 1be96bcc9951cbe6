"""SubDash — personal subscription-tracking dashboard."""

__version__ = "0.1.0"
