"""
Report Template Registry

Ingests, validates, stores and queries structured radiology report templates.
"""

__version__ = "1.0.0"
