from .users import AdminUser, UserRole
from .news import NewsCategory, NewsItem
from .community_arts import ArtCategory, CommunityArt
from .youtube import YoutubeVideo
from .audit_logs import AssetCleanupFailure

# Expose module-level names for `from promotheans_api.models import *`
__all__ = [
	"AdminUser",
	"UserRole",
	"NewsCategory",
	"NewsItem",
	"ArtCategory",
	"CommunityArt",
	"YoutubeVideo",
	"AssetCleanupFailure",
]
