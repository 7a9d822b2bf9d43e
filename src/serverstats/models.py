"""Data models for serverstats."""

from dataclasses import dataclass

from serverstats.config import BYTES_PER_GB


@dataclass(slots=True, frozen=True)
class MemoryUsage:
    """Memory figures from the ``mem`` object."""

    used: int  # Bytes
    total: int  # Bytes
    percent: float

    @property
    def used_gb(self) -> float:
        return self.used / BYTES_PER_GB

    @property
    def total_gb(self) -> float:
        return self.total / BYTES_PER_GB


@dataclass(slots=True, frozen=True)
class FilesystemUsage:
    """One entry of the ``fs`` array."""

    mnt_point: str
    size: int  # Bytes
    percent: float

    @property
    def size_gb(self) -> float:
        return self.size / BYTES_PER_GB


@dataclass(slots=True, frozen=True)
class ServerSnapshot:
    """
    Immutable view of one stats response.

    Sections missing from the response are ``None``; an empty ``fs`` array
    gives an empty ``filesystems`` tuple.
    """

    hostname: str = "PC"
    os_version: str = ""
    cpu_total: float | None = None
    memory: MemoryUsage | None = None
    filesystems: tuple[FilesystemUsage, ...] | None = None
