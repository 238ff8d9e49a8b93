from .database import db
from .user import User
from .meeting import Meeting, Participant, ActionPoint, PainPoint
from .invitation import Invitation
from .task import Task

__all__ = ['db', 'User', 'Meeting', 'Participant', 'ActionPoint', 'PainPoint', 'Invitation', 'Task']
