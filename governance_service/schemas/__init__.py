# __init__.py
from governance_service.schemas.common import CamelModel, OperationAcknowledgment
from governance_service.schemas.console import ActionResult, DashboardView, PreferencesPageView, UserDetailView, UsersPageView
from governance_service.schemas.statistics import HealthStatus, SystemStatistics
from governance_service.schemas.user_post import PostEngagementRequest, UserPostCreate, UserPostRead
from governance_service.schemas.user_preferences import UserPreferencesRead, UserPreferencesUpdate
from governance_service.schemas.user_profile import AuditEntry, UserProfileCreate, UserProfileRead, UserProfileUpdate, UserRole

__all__ = [
	"ActionResult",
	"AuditEntry",
	"CamelModel",
	"DashboardView",
	"HealthStatus",
	"OperationAcknowledgment",
	"PostEngagementRequest",
	"PreferencesPageView",
	"SystemStatistics",
	"UserDetailView",
	"UserPostCreate",
	"UserPostRead",
	"UserPreferencesRead",
	"UserPreferencesUpdate",
	"UserProfileCreate",
	"UserProfileRead",
	"UserProfileUpdate",
	"UserRole",
	"UsersPageView",
]
