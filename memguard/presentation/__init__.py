"""
Presentation Layer Package

HTTP surface of memguard: health, probe, status and shutdown routes.
"""

from memguard.presentation import controllers

__all__ = ["controllers"]
