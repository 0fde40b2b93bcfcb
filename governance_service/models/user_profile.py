import uuid

from sqlalchemy import Column, JSON, String, Text

from governance_service.database import Base
from governance_service.models.audit import AuditColumnsMixin


def new_id() -> str:
    return str(uuid.uuid4())


class UserProfileRecord(AuditColumnsMixin, Base):
    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    roles = Column(JSON, nullable=False, default=list)
    bio = Column(Text, nullable=True)
    profile_image_url = Column(String(2048), nullable=True)
    audit_trail = Column(JSON, nullable=False, default=list)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
