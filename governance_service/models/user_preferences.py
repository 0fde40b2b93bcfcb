from sqlalchemy import Boolean, Column, JSON, String

from governance_service.database import Base
from governance_service.models.audit import AuditColumnsMixin
from governance_service.models.user_profile import new_id


class UserPreferencesRecord(AuditColumnsMixin, Base):
    __tablename__ = "user_preferences"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), unique=True, index=True, nullable=False)

    theme = Column(String(32), nullable=False, default="light")
    language = Column(String(16), nullable=False, default="en")

    email_notifications = Column(Boolean, nullable=False, default=True)
    push_notifications = Column(Boolean, nullable=False, default=True)
    sms_notifications = Column(Boolean, nullable=False, default=False)

    profile_visible = Column(Boolean, nullable=False, default=True)
    show_email = Column(Boolean, nullable=False, default=False)
    show_last_seen = Column(Boolean, nullable=False, default=True)

    content_filter = Column(String(16), nullable=False, default="moderate")
    custom_settings = Column(JSON, nullable=False, default=dict)
