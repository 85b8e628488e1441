from pydantic import BaseModel, Field

class LoginIn(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, repr=False)

class TokenOut(BaseModel):
    token: str = Field(..., min_length=1, repr=False)
    model_config = {"extra": "ignore"}
