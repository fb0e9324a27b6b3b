# /portal/db/models/forum_models.py

from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from ..base_class import Base
from ._columns import utcnow


class ForumPost(Base):
    __tablename__ = "forum_posts"

    id = Column(String, primary_key=True, index=True)
    category_id = Column(String, nullable=False, default="general")
    author_id = Column(String, index=True, nullable=False)
    author_name = Column(String, nullable=False)
    class_label = Column(String, index=True, nullable=False)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    views = Column(Integer, nullable=False, default=0)

    replies = relationship(
        "ForumReply", back_populates="post", cascade="all, delete-orphan", order_by="ForumReply.created_at"
    )


class ForumReply(Base):
    __tablename__ = "forum_replies"

    id = Column(String, primary_key=True, index=True)
    post_id = Column(String, ForeignKey("forum_posts.id"), nullable=False, index=True)
    author_id = Column(String, nullable=False)
    author_name = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    post = relationship("ForumPost", back_populates="replies")
