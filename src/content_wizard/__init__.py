"""Content wizard - narratives, drafts and video assets for social media."""

__version__ = "0.1.0"
