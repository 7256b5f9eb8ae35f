"""Models for the session tokens exchanged with the admin API."""

from pydantic import BaseModel, ConfigDict, Field


class TokenPair(BaseModel):
    """Body returned by the token refresh endpoint.

    Refresh tokens rotate: the pair replaces the stored one in full.
    """

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken", min_length=1)
    refresh_token: str = Field(alias="refreshToken", min_length=1)


class RefreshRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str = Field(alias="refreshToken")
