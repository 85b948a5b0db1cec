"""Environment probes reporting OS version and distribution channel."""

from corelog.environment.base import EnvironmentProbe
from corelog.environment.static import StaticEnvironmentProbe
from corelog.environment.system import SystemEnvironmentProbe, parse_major_version

__all__ = [
    "EnvironmentProbe",
    "StaticEnvironmentProbe",
    "SystemEnvironmentProbe",
    "parse_major_version",
]
