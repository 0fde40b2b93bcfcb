# __init__.py
from governance_service.models.user_post import UserPostRecord
from governance_service.models.user_preferences import UserPreferencesRecord
from governance_service.models.user_profile import UserProfileRecord

__all__ = [
	"UserPostRecord",
	"UserPreferencesRecord",
	"UserProfileRecord",
]
