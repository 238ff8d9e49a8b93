"""
Request payload schemas.

Every JSON body is parsed into one of these pydantic models before it reaches
a service. Field names are snake_case in Python and camelCase on the wire
(``assignedTo``, ``dueDate``, ``actionPoints`` ...).
"""

from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

ParticipantRole = Literal['viewer', 'contributor', 'organizer']
ActionPointStatus = Literal['pending', 'in-progress', 'completed']
InvitationResponse = Literal['accepted', 'declined']
TaskStatus = Literal['pending', 'in-progress', 'completed']
TaskPriority = Literal['low', 'medium', 'high']


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# Timestamps are stored as naive UTC
UtcDateTime = Annotated[datetime, AfterValidator(_naive_utc)]


class Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')


# Auth

class RegisterPayload(Payload):
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginPayload(Payload):
    email: EmailStr
    password: str = Field(..., min_length=1)


# Meetings

class ParticipantIn(Payload):
    name: str = Field(..., min_length=1)
    email: EmailStr
    role: ParticipantRole = 'viewer'


class ActionPointIn(Payload):
    id: Optional[int] = Field(default=None, alias='_id')
    description: str = Field(..., min_length=1)
    assigned_to: Optional[str] = None
    due_date: UtcDateTime
    status: ActionPointStatus = 'pending'


class ActionPointPatch(Payload):
    description: Optional[str] = Field(default=None, min_length=1)
    assigned_to: Optional[str] = Field(default=None, min_length=1)
    due_date: Optional[UtcDateTime] = None
    status: Optional[ActionPointStatus] = None


class ActionPointStatusPayload(Payload):
    status: ActionPointStatus


class MeetingCreate(Payload):
    title: str = Field(..., min_length=1, max_length=50)
    date: UtcDateTime
    venue: str = Field(..., min_length=1)
    summary: str = Field(..., min_length=1)
    participants: List[ParticipantIn] = Field(default_factory=list)
    action_points: List[ActionPointIn] = Field(default_factory=list)

    @field_validator('title', mode='before')
    @classmethod
    def strip_title(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class MeetingUpdate(MeetingCreate):
    """Partial update; only keys present in ``model_fields_set`` are applied."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=50)
    date: Optional[UtcDateTime] = None
    venue: Optional[str] = Field(default=None, min_length=1)
    summary: Optional[str] = Field(default=None, min_length=1)
    participants: Optional[List[ParticipantIn]] = None
    action_points: Optional[List[ActionPointIn]] = None
    created_by: Optional[str] = None

    @field_validator('created_by', mode='before')
    @classmethod
    def stringify_creator(cls, value):
        if value is None:
            return value
        return str(value)


class PainPointIn(Payload):
    description: str = Field(..., min_length=1)


class PainPointStatusPayload(Payload):
    status: str = Field(..., min_length=1)


# Invitations

class SendInvitationsPayload(Payload):
    participants: List[ParticipantIn] = Field(..., min_length=1)


class InvitationStatusPayload(Payload):
    status: InvitationResponse


# Tasks

class TaskCreate(Payload):
    title: str = Field(..., min_length=1)
    description: str = ''
    deadline: Optional[UtcDateTime] = None
    assigned_to_email: EmailStr
    priority: TaskPriority = 'medium'


class TaskUpdate(Payload):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    deadline: Optional[UtcDateTime] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None


# Assistant

class GeneratePayload(Payload):
    prompt: str
    temperature: float = Field(default=0.7, ge=0, le=2)
    max_tokens: int = Field(default=1024, gt=0, le=8192)

    @field_validator('prompt')
    @classmethod
    def prompt_not_blank(cls, value):
        if not value.strip():
            raise ValueError('Prompt cannot be empty')
        return value


class ActionItemsPayload(Payload):
    notes: str = Field(..., min_length=1)
