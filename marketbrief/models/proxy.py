"""Proxy credential model."""

from urllib.parse import quote

from pydantic import BaseModel, Field


class HttpProxy(BaseModel):
    """Credential bundle from the rotating proxy service. Valid for one run."""

    host: str = Field(..., description="Proxy address")
    port: int = Field(..., description="Proxy port")
    username: str = Field(..., description="Proxy user")
    password: str = Field(..., description="Proxy password")

    @property
    def url(self) -> str:
        """Proxy URL with credentials, as accepted by httpx."""
        return (
            f"http://{quote(self.username, safe='')}:{quote(self.password, safe='')}"
            f"@{self.host}:{self.port}"
        )

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"
