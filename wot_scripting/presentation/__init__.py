"""
Presentation Layer Package

HTTP surface of the service: operation, context and system routers.
"""

from wot_scripting.presentation import controllers

__all__ = ["controllers"]
