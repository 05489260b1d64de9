"""SWDSMS: user accounts and incident reports with remote/local storage failover."""

__version__ = "0.1.0"
