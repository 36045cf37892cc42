"""Weekly Redmine time-entry reports."""

__version__ = "0.3.0"
