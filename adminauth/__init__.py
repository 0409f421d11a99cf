"""Admin authentication and permission authorization service"""

__version__ = "0.1.0"
