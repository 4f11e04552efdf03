"""Pydantic models for minurl."""

from minurl.models.base import FrozenCamelModel
from minurl.models.options import Options

__all__ = ["FrozenCamelModel", "Options"]
