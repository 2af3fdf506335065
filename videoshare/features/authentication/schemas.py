from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from videoshare.features.users.schemas import UserOut

# ---------- Inputs ----------

class RegisterIn(BaseModel):
    email: str = Field(min_length=3, max_length=254, pattern=r"^\s*[^@\s]+@[^@\s]+\s*$")
    password: str = Field(min_length=8, max_length=128)
    name: Optional[str] = Field(None, max_length=100)
    image: Optional[str] = None

class SignInIn(BaseModel):
    email: str
    password: str


# ---------- Outputs ----------

class AccessTokenOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # secondes
    user: UserOut
