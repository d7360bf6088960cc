from pydantic import BaseModel, Field, field_validator


# ---------- Event ----------
class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    date: str = Field(min_length=1, max_length=40)
    location: str = Field(min_length=1, max_length=200)
    # raw form value, parsed with parseInt semantics by the store
    capacity: str = Field(min_length=1)

    @field_validator("capacity", mode="before")
    @classmethod
    def stringify_capacity(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class EventOut(BaseModel):
    id: str
    title: str
    description: str
    date: str
    location: str
    organizer_id: str
    capacity: int | None
    participants: list[str] = Field(default_factory=list)
    participant_count: int
    created_at: str

    class Config:
        from_attributes = True

    @field_validator("participants", mode="before")
    @classmethod
    def default_participants(cls, value):
        return value or []


class EventCreatedOut(BaseModel):
    event: EventOut
    redirect: str = "/dashboard"


class EventDetailOut(BaseModel):
    event: EventOut
    is_registered: bool
    is_organizer: bool
    is_full: bool
    action: str | None
    can_download_certificate: bool
