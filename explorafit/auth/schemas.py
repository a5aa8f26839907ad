from pydantic import BaseModel, ConfigDict, EmailStr, Field

class SignupIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=72)

class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    email: str
    is_premium: bool
    credits: int

class AuthOut(BaseModel):
    ok: bool = True
    token: str
    user: UserOut
