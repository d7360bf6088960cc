import enum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from unieventos.database.db import Base
from unieventos.models.events import new_document_id, utc_now_iso


class Role(str, enum.Enum):
    ORGANIZER = "organizer"
    PARTICIPANT = "participant"


class UserProfile(Base):
    __tablename__ = "profiles"

    uid: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_document_id)
    email: Mapped[str] = mapped_column(String(254), unique=True, nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=Role.PARTICIPANT.value)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    token_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False, default=utc_now_iso)
