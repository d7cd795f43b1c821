"""
Command line tools for Posture Sentinel.
"""
