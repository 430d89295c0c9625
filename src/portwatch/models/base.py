"""Base models and enums."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )


class TransportProtocol(str, Enum):
    """Transport protocol of a listening socket."""

    TCP = "TCP"
    UDP = "UDP"


class PortCategory(str, Enum):
    """Built-in port categories."""

    DEV_SERVER = "dev-server"
    API = "api"
    DATABASE = "database"
    STORYBOOK = "storybook"
    TESTING = "testing"
    UNEXPECTED = "unexpected"
    OTHER = "other"
