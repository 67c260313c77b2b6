"""Application layer: manifests and the command-line runner."""

from .manifest import (
    CrateSpec,
    Manifest,
    ManifestError,
    TruckSpec,
    generate_crates,
    load_manifest,
    save_manifest,
)

__all__ = [
    "CrateSpec",
    "Manifest",
    "ManifestError",
    "TruckSpec",
    "generate_crates",
    "load_manifest",
    "save_manifest",
]
