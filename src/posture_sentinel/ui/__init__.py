"""
User interface APIs for Posture Sentinel.
"""

__all__ = ["http_server"]
