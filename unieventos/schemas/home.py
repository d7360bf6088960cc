from pydantic import BaseModel


class NavLinkOut(BaseModel):
    label: str
    path: str
    method: str = "GET"


class HomeOut(BaseModel):
    name: str
    links: list[NavLinkOut]
