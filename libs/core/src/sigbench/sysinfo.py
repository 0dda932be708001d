from __future__ import annotations
import os
import pathlib
import platform
import subprocess

import psutil

from .metrics import SystemInfo

_BYTES_PER_GB = 1_000_000_000


def _detect_cpu_model() -> str | None:
    """Brand string of the first logical CPU, best effort per platform."""
    system = platform.system()
    try:
        if system == "Darwin":
            out = subprocess.check_output(
                ["sysctl", "-n", "machdep.cpu.brand_string"],
                stderr=subprocess.DEVNULL,
                text=True,
            ).strip()
            if out:
                return out
        elif system == "Linux":
            cpuinfo = pathlib.Path("/proc/cpuinfo")
            if cpuinfo.exists():
                for line in cpuinfo.read_text(encoding="utf-8", errors="ignore").splitlines():
                    if line.lower().startswith("model name"):
                        return line.split(":", 1)[1].strip()
        elif system == "Windows":
            out = subprocess.check_output(
                [
                    "powershell",
                    "-NoProfile",
                    "-Command",
                    "(Get-CimInstance Win32_Processor | Select-Object -First 1 -ExpandProperty Name)"
                ],
                stderr=subprocess.DEVNULL,
                text=True,
            ).strip()
            if out:
                return out
    except (OSError, subprocess.SubprocessError):
        pass
    val = os.environ.get("PROCESSOR_IDENTIFIER")
    if val:
        return val
    uname = platform.uname()
    for val in (uname.processor, uname.machine, platform.processor()):
        if val:
            return val
    return None


def _detect_os() -> str:
    try:
        return platform.platform(aliased=True)
    except Exception:
        return "<unknown>"


def collect_system_info() -> SystemInfo:
    cores = psutil.cpu_count(logical=False) or psutil.cpu_count() or 0
    return SystemInfo(
        os=_detect_os(),
        total_memory=psutil.virtual_memory().total // _BYTES_PER_GB,
        cpu_brand=_detect_cpu_model() or "<unknown>",
        cpu_cores=int(cores),
    )
