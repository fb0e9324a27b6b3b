# /portal/db/base.py

# Central registry for all SQLAlchemy models. Importing them here guarantees
# that `Base.metadata` knows every table before `create_all` runs at startup.

from .base_class import Base

from .models.identity_models import AuthUser, Profile, SchoolClass
from .models.content_models import Announcement, Exam, Meeting, ScheduleItem
from .models.poll_models import Poll, PollOption, PollVote
from .models.forum_models import ForumPost, ForumReply
from .models.audit_models import AuditLog
