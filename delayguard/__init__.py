"""
DelayGuard — production order delay-risk estimation engine.

Turns operational readiness metrics into a delay-risk percentage and a
qualitative band, computed asynchronously after a simulated processing delay.
"""

__version__ = "0.1.0"
