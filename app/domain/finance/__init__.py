"""Finance domain - Income rollups from finished appointments"""

from .router import router

__all__ = ["router"]
