"""Video commands."""

from .commands import video_script, video_seo, video_thumbnail, video_titles

__all__ = ["video_script", "video_seo", "video_thumbnail", "video_titles"]
