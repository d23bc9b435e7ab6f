from datetime import datetime, timezone
def utcnow():
    return datetime.now(timezone.utc)
from .member import Member
from .task import Task
from .reward import Reward, RewardRequest
from .activity_log import ActivityLog
from .punishment import Punishment
