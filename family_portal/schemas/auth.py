from pydantic import BaseModel
from .member import MemberOut
class PinLoginIn(BaseModel):
    member_id: str
    pin: str
class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    member: MemberOut
