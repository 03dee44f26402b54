"""
Model registration for the licenses app.
"""
from licenses.infrastructure.models import License, Purchase  # noqa: F401
