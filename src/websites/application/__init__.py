from websites.application.profile_service import OwnerProfileService
from websites.application.website_service import SlugCheck, WebsiteService, WebsitesUnitOfWork

__all__ = ["OwnerProfileService", "SlugCheck", "WebsiteService", "WebsitesUnitOfWork"]
