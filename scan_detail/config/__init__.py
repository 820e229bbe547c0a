"""
Configuration management for the detail-view core.
"""

from scan_detail.config.settings import Settings, configure_logging, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
