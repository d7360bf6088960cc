from pydantic import BaseModel


class DashboardEventOut(BaseModel):
    id: str
    title: str
    description: str
    date: str
    location: str
    participant_count: int
    # only set for participants
    registered: bool | None = None


class EmptyStateOut(BaseModel):
    title: str
    message: str


class DashboardOut(BaseModel):
    heading: str
    can_create_event: bool
    events: list[DashboardEventOut]
    empty_state: EmptyStateOut | None = None
