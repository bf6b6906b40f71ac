from pydantic import BaseModel


class SignIn(BaseModel):
    username: str
    password: str


class SignedIn(BaseModel):
    username: str
    signed_in: bool = True
