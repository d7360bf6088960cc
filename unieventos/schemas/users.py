from pydantic import BaseModel, Field

from unieventos.models.users import Role


class SignUpRequest(BaseModel):
    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6, max_length=128)
    role: Role = Role.PARTICIPANT


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=254)
    password: str = Field(min_length=1, max_length=128)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ProfileOut(BaseModel):
    uid: str
    email: str
    role: Role

    class Config:
        from_attributes = True
