"""SiteClocks: persistence and live sync for site clock widgets."""

__version__ = "0.1.0"
