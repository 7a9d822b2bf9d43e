"""Turn Glances ``/api/4/all`` responses into display text."""

import json
import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

from serverstats.config import EN, SEPARATOR, Labels
from serverstats.errors import FormatError
from serverstats.models import FilesystemUsage, MemoryUsage, ServerSnapshot

DEFAULT_HOSTNAME = "PC"
MIN_DISK_SIZE_GB = 1.0  # Smaller filesystems are not shown

# Wide enough for every finite float written out in full
_ROUNDING_CONTEXT = Context(prec=400)


def _opt_object(obj: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = obj.get(key)
    return value if isinstance(value, dict) else None


def _opt_str(obj: dict[str, Any], key: str, default: str) -> str:
    value = obj.get(key)
    if value is None or isinstance(value, (dict, list)):
        return default
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _opt_float(obj: dict[str, Any], key: str, default: float = 0.0) -> float:
    value = obj.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default


def _opt_int(obj: dict[str, Any], key: str, default: int = 0) -> int:
    value = obj.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return default
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    return default


def _fixed(value: float, places: int) -> str:
    """Fixed-point text for a float, rounding halves away from zero."""
    if not math.isfinite(value):
        return f"{value:.{places}f}"
    exponent = Decimal(1).scaleb(-places)
    rounded = Decimal(repr(value)).quantize(
        exponent, rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT
    )
    return format(rounded, "f")


def parse_snapshot(json_text: str) -> ServerSnapshot:
    """
    Parse a stats response into a ServerSnapshot.

    Every field is optional and defaulted on its own, so partial responses
    still produce a snapshot.

    Raises:
        FormatError: If the text is not valid JSON or not a JSON object.
    """
    try:
        root = json.loads(json_text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"Invalid JSON: {exc}") from exc
    if not isinstance(root, dict):
        raise FormatError(f"Expected a JSON object, got {type(root).__name__}")

    system = _opt_object(root, "system")
    hostname = _opt_str(root, "hostname", DEFAULT_HOSTNAME)
    os_version = ""
    if system is not None:
        hostname = _opt_str(system, "hostname", hostname)
        os_version = _opt_str(system, "os_version", "")

    cpu = _opt_object(root, "cpu")
    cpu_total = _opt_float(cpu, "total") if cpu is not None else None

    mem = _opt_object(root, "mem")
    memory = None
    if mem is not None:
        memory = MemoryUsage(
            used=_opt_int(mem, "used"),
            total=_opt_int(mem, "total"),
            percent=_opt_float(mem, "percent"),
        )

    fs = root.get("fs")
    filesystems = None
    if isinstance(fs, list):
        filesystems = tuple(
            FilesystemUsage(
                mnt_point=_opt_str(disk, "mnt_point", ""),
                size=_opt_int(disk, "size"),
                percent=_opt_float(disk, "percent"),
            )
            for disk in fs
            if isinstance(disk, dict)
        )

    return ServerSnapshot(
        hostname=hostname,
        os_version=os_version,
        cpu_total=cpu_total,
        memory=memory,
        filesystems=filesystems,
    )


def render_snapshot(snapshot: ServerSnapshot, labels: Labels = EN) -> str:
    """Render a snapshot as newline-terminated lines, in response order."""
    lines = [f"{labels.server}{snapshot.hostname}"]
    if snapshot.os_version:
        lines.append(f"{labels.release}{snapshot.os_version}")
    lines.append(SEPARATOR)

    if snapshot.cpu_total is not None:
        lines.append(f"CPU Load: {snapshot.cpu_total}%")

    mem = snapshot.memory
    if mem is not None:
        lines.append(
            f"RAM: {_fixed(mem.percent, 1)}% "
            f"({_fixed(mem.used_gb, 2)} / {_fixed(mem.total_gb, 2)} GB)"
        )

    if snapshot.filesystems is not None:
        lines.append("")
        lines.append(labels.disks)
        for disk in snapshot.filesystems:
            size_gb = disk.size_gb
            if size_gb > MIN_DISK_SIZE_GB:
                percent = _fixed(disk.percent, 1)
                lines.append(f"{disk.mnt_point}: {percent}% {labels.disk_of} {_fixed(size_gb, 0)} GB")

    return "".join(f"{line}\n" for line in lines)


def format_stats(json_text: str, labels: Labels = EN) -> str:
    """Parse and render a stats response in one step."""
    return render_snapshot(parse_snapshot(json_text), labels)


def format_error(exc: BaseException, labels: Labels = EN) -> str:
    """Render a failed polling attempt."""
    message = str(exc) or type(exc).__name__
    return f"{labels.error}\n{message}\n"
