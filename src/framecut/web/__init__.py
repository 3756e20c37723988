"""FastAPI REST API for cutting plans.

This module provides a REST API for computing cutting plans, printing
cutting sheets and validating job configurations.

Usage:
    uvicorn framecut.web:app --reload
"""

from framecut.web.app import app, create_app

__all__ = ["app", "create_app"]
