"""Pydantic schema for the YAML client configuration file."""

from pydantic import BaseModel, ConfigDict, Field


class ThereThenConfiguration(BaseModel):
    """Structure of a client configuration file. Every key is optional."""

    model_config = ConfigDict(extra="forbid")

    base_url: str | None = Field(None, description="Backend API base address, e.g. http://localhost:8000/api")
    stream_url: str | None = Field(None, description="Realtime stream address, e.g. ws://localhost:8000/ws/chat/")
    request_timeout: float | None = Field(None, gt=0, description="Total timeout per API request in seconds")
    token: str | None = Field(None, description="Bearer token to start the session with")
