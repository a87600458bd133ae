"""Authentication models: credentials, drafts and the issued session."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    username: str
    email: str | None = None


class Session(BaseModel):
    """Bearer credential plus the identity it was issued for."""

    model_config = ConfigDict(frozen=True)

    token: str
    user: UserInfo


class LoginCredentials(BaseModel):
    username: str
    password: str


class SignupCredentials(BaseModel):
    username: str
    email: str
    password: str


class LoginDraft(BaseModel):
    username: str = ""
    password: str = ""

    def credentials(self) -> LoginCredentials:
        return LoginCredentials(username=self.username, password=self.password)


class SignupDraft(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""

    def credentials(self) -> SignupCredentials:
        # confirm_password only exists for the form check and is never sent.
        return SignupCredentials(username=self.username, email=self.email, password=self.password)
