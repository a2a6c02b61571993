"""Pydantic schema for the ping endpoint."""

from pydantic import BaseModel

from fdcalc.logging_setup import SERVICE_NAME


class PingResponse(BaseModel):
    message: str = "pong"
    service: str = SERVICE_NAME
