"""
Model registration for the software app.
"""
from software.infrastructure.models import SoftwareVersion  # noqa: F401
