from __future__ import annotations

from typing import Any

ARCH_NAMES = {32: "i386", 64: "x64"}


def normalize_arch(arch: int | str) -> str:
    try:
        return ARCH_NAMES[int(arch)]
    except (KeyError, TypeError, ValueError):
        raise ValueError(f"arch must be 32 or 64, got {arch!r}") from None


def _keep(entry: Any, *, family: str | None, arch_name: str | None) -> bool:
    if not isinstance(entry, dict):
        return True
    if arch_name is not None and "arch" in entry and entry["arch"] != arch_name:
        return False
    if family and "family" in entry and entry["family"] != family:
        return False
    return True


def filter_os_list(data: Any, *, family: str | None = None, arch: int | str | None = None) -> Any:
    """Filter an os/list payload by family and/or architecture (32 or 64).

    The payload is usually a dict keyed by OSID; a list of entries is
    accepted too. Entries lacking the filtered field are kept.
    """
    arch_name = normalize_arch(arch) if arch else None
    if arch_name is None and not family:
        return data
    if isinstance(data, dict):
        return {k: v for k, v in data.items() if _keep(v, family=family, arch_name=arch_name)}
    if isinstance(data, list):
        return [v for v in data if _keep(v, family=family, arch_name=arch_name)]
    return data
