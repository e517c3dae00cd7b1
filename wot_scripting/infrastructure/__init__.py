"""
Infrastructure Layer Package

Concrete implementations of the domain ports: the HTTP thing runtime,
in-memory context stores and the health check service.
"""
