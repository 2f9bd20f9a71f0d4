"""Container image source detection, platform parsing, registry credentials, node trees and file helpers."""

__version__ = "0.1.0"

__all__ = [
    "fileutils",
    "node",
    "platform",
    "registry",
    "source",
    "tree",
    "walker",
]