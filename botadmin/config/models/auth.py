"""Bearer token configuration."""

from typing import Literal

from pydantic import BaseModel, Field

JWTAlgorithm = Literal["HS256", "HS384", "HS512"]


class AuthConfig(BaseModel):
    """JWT verification settings.

    The signing secret is never read from TOML; it comes from the
    BOTADMIN_JWT_SECRET environment variable.
    """

    algorithm: JWTAlgorithm = Field(default="HS256", description="JWT signing algorithm")
    secret_env_var: str = Field(
        default="BOTADMIN_JWT_SECRET",
        description="Environment variable holding the signing secret",
    )
