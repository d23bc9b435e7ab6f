from ..models.member import Member, MemberRole
from ..models.task import Task, TaskCategory, Recurrence
from ..models.reward import Reward, RewardCategory, RewardRequest, RequestStatus
from ..models.activity_log import ActivityLog, LogType
from ..models.punishment import Punishment, PunishmentType
from ..db.base_class import Base
