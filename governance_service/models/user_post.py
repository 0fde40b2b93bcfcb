from sqlalchemy import Boolean, Column, Index, Integer, JSON, String, Text

from governance_service.database import Base
from governance_service.models.audit import AuditColumnsMixin
from governance_service.models.user_profile import new_id


class UserPostRecord(AuditColumnsMixin, Base):
    __tablename__ = "user_posts"
    __table_args__ = (Index("ix_user_posts_user_id_deleted", "user_id", "deleted"),)

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), index=True, nullable=False)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    image_urls = Column(JSON, nullable=True)
    tags = Column(JSON, nullable=True)
    is_public = Column(Boolean, nullable=False, default=True)
    status = Column(String(16), nullable=False, default="PUBLISHED")

    view_count = Column(Integer, nullable=False, default=0)
    like_count = Column(Integer, nullable=False, default=0)
    comment_count = Column(Integer, nullable=False, default=0)
