"""Per-origin configuration records."""

from pydantic import BaseModel, ConfigDict, Field


class CryptCredentials(BaseModel):
    """Parameters of the rclone crypt remote. Opaque pass-through values."""

    model_config = ConfigDict(frozen=True)

    password: str = Field(repr=False)
    salt: str = Field(repr=False)
    encoding: str


class Configuration(BaseModel):
    """Operating parameters for one file-manager origin.

    Built once at startup; a refresh enriches it with crypt credentials via
    with_crypt(), which returns a new value.
    """

    model_config = ConfigDict(frozen=True)

    service_origin: str
    auth_token: str = Field(repr=False)
    virtual_mount_path: str
    real_base_path: str
    crypt: CryptCredentials | None = None

    def with_crypt(self, crypt: CryptCredentials) -> "Configuration":
        return self.model_copy(update={"crypt": crypt})
