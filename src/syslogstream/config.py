from __future__ import annotations

from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, field_validator

from .format import Facility, Severity

"""
Config layer
- load_yaml(path) -> dict
- SyslogConfig (Pydantic v2) + validate_config(raw) -> SyslogConfig

Host/port validation lives here; the writer itself takes whatever it is given.
"""


#This function loads and parses YAML into a raw dictionary using yaml.safe_load.
def load_yaml(path: str) -> Dict[str, Any]:
    """
    Load and parse YAML into raw dict using yaml.safe_load.

    Raises:
        FileNotFoundError: if the file does not exist
        yaml.YAMLError: if YAML is malformed/unsafe
        ValueError: if the top-level document is not a mapping
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        # Treat empty file as empty mapping
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Top-level YAML must be a mapping/dict (file: {path})")
    return data


# This function turns "local0", "LOCAL0" or 16 into the matching enum member.
def _enum_member(enum_cls, v: Union[str, int], what: str):
    if isinstance(v, enum_cls):
        return v
    if isinstance(v, str):
        key = v.strip().upper()
        if key.isdigit():
            v = int(key)
        else:
            try:
                return enum_cls[key]
            except KeyError:
                names = ", ".join(m.name.lower() for m in enum_cls)
                raise ValueError(f"unknown {what} {v!r}; expected one of: {names}") from None
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"{what} must be a name or an integer; got {v!r}")
    try:
        return enum_cls(v)
    except ValueError:
        raise ValueError(f"{what} code {v} out of range") from None


class SyslogConfig(BaseModel):
    host: str
    port: int = 514
    facility: Facility = Facility.USER
    severity: Severity = Severity.INFO
    tag: Optional[str] = None
    hostname: Optional[str] = None
    timeout: Optional[float] = None

    # --- Validators ---

    #This validator checks that the host is a non-empty string.
    @field_validator("host")
    @classmethod
    def _host_non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("host must be a non-empty string")
        return v

    #This validator checks that the port is between 1 and 65535.
    @field_validator("port")
    @classmethod
    def _port_in_range(cls, v: int) -> int:
        if not (1 <= v <= 65535):
            raise ValueError("port must be 1..65535")
        return v

    @field_validator("facility", mode="before")
    @classmethod
    def _facility_by_name(cls, v: Any) -> Facility:
        return _enum_member(Facility, v, "facility")

    @field_validator("severity", mode="before")
    @classmethod
    def _severity_by_name(cls, v: Any) -> Severity:
        return _enum_member(Severity, v, "severity")

    #This validator keeps the tag to one short word, as RFC 3164 expects.
    @field_validator("tag")
    @classmethod
    def _tag_single_word(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        if any(c.isspace() for c in v):
            raise ValueError("tag must not contain whitespace")
        if len(v) > 32:
            raise ValueError("tag must be at most 32 characters")
        return v

    @field_validator("timeout")
    @classmethod
    def _timeout_positive(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("timeout must be > 0 seconds")
        return v


#This function validates and normalizes a raw dictionary into a SyslogConfig object using Pydantic's model_validate.
def validate_config(raw: dict[str, Any]) -> SyslogConfig:
    """Validate and normalize raw dict into SyslogConfig."""
    return SyslogConfig.model_validate(raw)


__all__ = ["load_yaml", "SyslogConfig", "validate_config"]
