"""Terminal front end for the content wizard.

Layout:
- core/: Shared console helpers
- wizard/: Interactive wizard and its individual steps
- video/: Long-form video services

Usage:
    content-wizard --help
    content-wizard wizard --type carousel --theme "Produtividade real"
"""

from .app import app, main

__all__ = ["app", "main"]
