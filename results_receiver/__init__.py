"""
Results Receiver service.

Accepts test-run result submissions from trusted processors, stores them and
notifies the check-run reporting service.
"""

__version__ = "0.1.0"
