"""Working out where a container image comes from (daemon, archive, directory, registry...)."""

from __future__ import annotations

import enum
import os
import stat
import tarfile
from typing import BinaryIO, List, Tuple

SCHEME_SEPARATOR = ":"

_SIF_MAGIC_OFFSET = 32
_SIF_MAGIC = b"SIF_MAGIC\x00"
_SIF_VERSION_LEN = 2


class SourceDetectionError(Exception):
    """Raised when the environment prevents working out an image source."""


class Source(enum.IntEnum):
    """A concrete kind of image provider."""

    UNKNOWN = 0
    DOCKER_TARBALL = 1
    DOCKER_DAEMON = 2
    OCI_DIRECTORY = 3
    OCI_TARBALL = 4
    OCI_REGISTRY = 5
    PODMAN_DAEMON = 6
    SINGULARITY = 7

    def __str__(self) -> str:
        return _SOURCE_NAMES[self]


_SOURCE_NAMES = {
    Source.UNKNOWN: "UnknownSource",
    Source.DOCKER_TARBALL: "DockerTarball",
    Source.DOCKER_DAEMON: "DockerDaemon",
    Source.OCI_DIRECTORY: "OciDirectory",
    Source.OCI_TARBALL: "OciTarball",
    Source.OCI_REGISTRY: "OciRegistry",
    Source.PODMAN_DAEMON: "PodmanDaemon",
    Source.SINGULARITY: "Singularity",
}

ALL_SOURCES: List[Source] = [s for s in Source if s is not Source.UNKNOWN]

_SCHEMES = {
    "docker-archive": Source.DOCKER_TARBALL,
    "docker": Source.DOCKER_DAEMON,
    "podman": Source.PODMAN_DAEMON,
    "oci-dir": Source.OCI_DIRECTORY,
    "oci-archive": Source.OCI_TARBALL,
    "oci-registry": Source.OCI_REGISTRY,
    "registry": Source.OCI_REGISTRY,
    "singularity": Source.SINGULARITY,
}

_PATH_SOURCES = frozenset(
    {Source.OCI_DIRECTORY, Source.OCI_TARBALL, Source.DOCKER_TARBALL, Source.SINGULARITY}
)

# archive members that identify an archive format, checked in this order
_ARCHIVE_EVIDENCE: Tuple[Tuple[str, Source], ...] = (
    ("manifest.json", Source.DOCKER_TARBALL),
    ("oci-layout", Source.OCI_TARBALL),
)


def parse_source_scheme(source: str) -> Source:
    """Map a user-given scheme (case-insensitive) to a source; unknown schemes give UNKNOWN."""
    return _SCHEMES.get(source.lower(), Source.UNKNOWN)


def _expand_home(path: str) -> str:
    if not path.startswith("~"):
        return path
    if len(path) > 1 and path[1] not in "/\\":
        raise SourceDetectionError(
            f"unable to expand potential home dir expression: "
            f"cannot expand user-specific home dir in {path!r}"
        )
    return os.path.expanduser(path)


def detect_source(user_input: str) -> Tuple[Source, str]:
    """Split user input into the image source and the location of the image.

    The location is empty when the source is unknown.
    """
    candidates = user_input.split(SCHEME_SEPARATOR, 1)
    source = Source.UNKNOWN
    location = user_input
    hint = ""
    if len(candidates) == 2:
        hint = candidates[0]
        source = parse_source_scheme(hint)

    if source is not Source.UNKNOWN:
        location = user_input[len(hint) + len(SCHEME_SEPARATOR):]
    else:
        source = detect_source_from_path(location)

    if source in _PATH_SOURCES:
        # the shell will not have expanded a tilde that follows an explicit scheme
        location = _expand_home(location)
    elif source is Source.UNKNOWN:
        location = ""
    return source, location


def _is_sif(f: BinaryIO) -> bool:
    header = f.read(_SIF_MAGIC_OFFSET + len(_SIF_MAGIC) + _SIF_VERSION_LEN)
    magic_end = _SIF_MAGIC_OFFSET + len(_SIF_MAGIC)
    if len(header) < magic_end + _SIF_VERSION_LEN:
        return False
    if header[_SIF_MAGIC_OFFSET:magic_end] != _SIF_MAGIC:
        return False
    return header[magic_end:].isdigit()


def _tar_contains(f: BinaryIO, member_name: str, img_path: str) -> bool:
    f.seek(0, os.SEEK_END)
    if f.tell() == 0:
        return False
    f.seek(0)
    try:
        with tarfile.open(fileobj=f, mode="r:") as archive:
            return any(member.name == member_name for member in archive)
    except tarfile.TarError as exc:
        raise SourceDetectionError(f"unable to read archive={img_path}: {exc}") from exc


def detect_source_from_path(img_path: str) -> Source:
    """Tell an OCI layout directory, an OCI archive, a docker archive and a SIF file apart."""
    img_path = _expand_home(img_path)
    try:
        info = os.stat(img_path)
    except FileNotFoundError:
        return Source.UNKNOWN
    except OSError as exc:
        raise SourceDetectionError(f"failed to open path={img_path}: {exc}") from exc

    if stat.S_ISDIR(info.st_mode):
        try:
            os.stat(os.path.join(img_path, "oci-layout"))
        except FileNotFoundError:
            return Source.UNKNOWN
        except OSError:
            pass
        return Source.OCI_DIRECTORY

    try:
        f = open(img_path, "rb")
    except OSError as exc:
        raise SourceDetectionError(f"unable to open file={img_path}: {exc}") from exc

    with f:
        if _is_sif(f):
            return Source.SINGULARITY
        for member_name, source in _ARCHIVE_EVIDENCE:
            if _tar_contains(f, member_name, img_path):
                return source
    return Source.UNKNOWN