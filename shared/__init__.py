"""
Shared building blocks for the compression service.

Subpackages:
- framework: environment-driven settings and Prometheus metrics
- utils: structured logging and the error taxonomy
"""
