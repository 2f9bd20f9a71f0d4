"""Parsing and normalising container image platform specifiers (os/arch/variant)."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Optional, Tuple

_SPECIFIER_RE = re.compile(r"^[A-Za-z0-9_-]+$")

_KNOWN_OS = frozenset(
    {
        "aix",
        "android",
        "darwin",
        "dragonfly",
        "freebsd",
        "hurd",
        "illumos",
        "js",
        "linux",
        "nacl",
        "netbsd",
        "openbsd",
        "plan9",
        "solaris",
        "windows",
        "zos",
    }
)

_KNOWN_ARCH = frozenset(
    {
        "386",
        "amd64",
        "amd64p32",
        "arm",
        "armbe",
        "arm64",
        "arm64be",
        "ppc64",
        "ppc64le",
        "mips",
        "mipsle",
        "mips64",
        "mips64le",
        "mips64p32",
        "mips64p32le",
        "ppc",
        "riscv",
        "riscv64",
        "s390",
        "s390x",
        "sparc",
        "sparc64",
        "wasm",
    }
)


class PlatformError(ValueError):
    """Raised when a platform specifier cannot be parsed."""


@dataclass
class Platform:
    """The operating system, CPU architecture and optional CPU variant of an image."""

    architecture: str = ""
    os: str = ""
    variant: str = ""

    def __str__(self) -> str:
        return "/".join(field for field in (self.os, self.architecture, self.variant) if field)


def _host_os() -> str:
    name = sys.platform
    if name.startswith("linux"):
        return "linux"
    if name in ("win32", "cygwin", "msys"):
        return "windows"
    if name.startswith("sunos"):
        return "solaris"
    return name.rstrip("0123456789")


def is_known_os(os_name: str) -> bool:
    """Tell whether a normalised OS name is one we know."""
    return os_name in _KNOWN_OS


def is_known_arch(arch: str) -> bool:
    """Tell whether a normalised architecture name is one we know."""
    return arch in _KNOWN_ARCH


def normalize_os(os_name: str) -> str:
    """Lower-case an OS name and map aliases; an empty name means the host OS."""
    if not os_name:
        return _host_os()
    os_name = os_name.lower()
    if os_name == "macos":
        return "darwin"
    return os_name


def normalize_arch(arch: str, variant: str) -> Tuple[str, str]:
    """Map architecture aliases and fill in or drop variants as the convention dictates."""
    arch, variant = arch.lower(), variant.lower()
    if arch == "i386":
        return "386", ""
    if arch in ("x86_64", "x86-64"):
        return "amd64", ""
    if arch in ("aarch64", "arm64"):
        if variant in ("8", "v8"):
            variant = ""
        return "arm64", variant
    if arch == "armhf":
        return "arm", "v7"
    if arch == "armel":
        return "arm", "v6"
    if arch == "arm":
        if variant in ("", "7"):
            variant = "v7"
        elif variant in ("5", "6", "8"):
            variant = "v" + variant
    return arch, variant


def _unknown(specifier: str) -> PlatformError:
    return PlatformError(f"{specifier!r}: unknown operating system or architecture")


def _parse(specifier: str) -> Platform:
    if "*" in specifier:
        raise PlatformError(f"{specifier!r}: wildcards not yet supported")

    parts = specifier.split("/")
    for part in parts:
        if not _SPECIFIER_RE.match(part):
            raise PlatformError(
                f"{part!r} is an invalid component of {specifier!r}: "
                f"platform specifier component must match {_SPECIFIER_RE.pattern!r}"
            )

    platform = Platform()
    if len(parts) == 1:
        os_guess = normalize_os(parts[0])
        if is_known_os(os_guess):
            platform.os = os_guess
            return platform
        arch_guess, variant_guess = normalize_arch(parts[0], "")
        if is_known_arch(arch_guess):
            platform.architecture, platform.variant = arch_guess, variant_guess
            return platform
        raise _unknown(specifier)

    if len(parts) == 2:
        os_guess = normalize_os(parts[0])
        if is_known_os(os_guess):
            platform.os = os_guess
            arch_guess, variant_guess = normalize_arch(parts[1], "")
        else:
            arch_guess, variant_guess = normalize_arch(parts[0], parts[1])
        if is_known_arch(arch_guess):
            platform.architecture, platform.variant = arch_guess, variant_guess
            return platform
        raise _unknown(specifier)

    if len(parts) == 3:
        os_guess = normalize_os(parts[0])
        if is_known_os(os_guess):
            platform.os = os_guess
        arch_guess, variant_guess = normalize_arch(parts[1], parts[2])
        if is_known_arch(arch_guess):
            platform.architecture, platform.variant = arch_guess, variant_guess
            return platform
        raise _unknown(specifier)

    raise PlatformError(f"{specifier!r}: cannot parse platform specifier")


def new_platform(specifier: str) -> Platform:
    """Parse a specifier such as ``linux/arm64/v8``; the OS defaults to linux."""
    try:
        platform: Optional[Platform] = _parse(specifier)
    except PlatformError as exc:
        raise PlatformError(f"failed to parse platform {specifier!r}: {exc}") from exc
    if not platform.os:
        platform.os = "linux"
    return platform