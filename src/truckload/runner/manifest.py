"""
Manifest loader — read/write truck + crate manifests from YAML or JSON.

Expected schema (YAML shown, JSON uses the same keys)::

    name: week-12
    truck: {width: 10, height: 8, length: 20}
    crates:
      - {id: 1, width: 4, height: 2, length: 6}
      - {id: 2, width: 3, height: 3, length: 3}

Usage:
    from truckload.runner.manifest import load_manifest
    manifest = load_manifest("manifests/week12.yaml")
    plan = LoadingPlan(manifest.to_truck(), manifest.to_crates())
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import AliasChoices, BaseModel, Field, ValidationError, model_validator

from truckload.core.models import Crate, Truck

YAML_SUFFIXES = {".yaml", ".yml"}


class ManifestError(ValueError):
    """Manifest file is unreadable or does not match the schema."""


class TruckSpec(BaseModel):
    """Truck cargo space with positive integer dimensions."""

    width: int = Field(gt=0, validation_alias=AliasChoices("width", "Width"))
    height: int = Field(gt=0, validation_alias=AliasChoices("height", "Height"))
    length: int = Field(gt=0, validation_alias=AliasChoices("length", "Length"))

    def to_truck(self) -> Truck:
        return Truck(width=self.width, height=self.height, length=self.length)


class CrateSpec(BaseModel):
    """One crate with identifier and positive integer dimensions."""

    crate_id: int = Field(validation_alias=AliasChoices("crate_id", "id", "CrateID"))
    width: int = Field(gt=0, validation_alias=AliasChoices("width", "Width"))
    height: int = Field(gt=0, validation_alias=AliasChoices("height", "Height"))
    length: int = Field(gt=0, validation_alias=AliasChoices("length", "Length"))

    def to_crate(self) -> Crate:
        return Crate(crate_id=self.crate_id, width=self.width,
                     height=self.height, length=self.length)


class Manifest(BaseModel):
    """A truck and the crates to load into it."""

    name: str = ""
    truck: TruckSpec
    crates: List[CrateSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_crate_ids(self) -> "Manifest":
        seen: set = set()
        for crate in self.crates:
            if crate.crate_id in seen:
                raise ValueError(f"duplicate crate id {crate.crate_id}")
            seen.add(crate.crate_id)
        return self

    def to_truck(self) -> Truck:
        return self.truck.to_truck()

    def to_crates(self) -> List[Crate]:
        return [c.to_crate() for c in self.crates]

    @classmethod
    def from_models(cls, truck: Truck, crates: List[Crate], name: str = "") -> "Manifest":
        return cls(
            name=name,
            truck=TruckSpec(**truck.to_dict()),
            crates=[CrateSpec(**c.to_dict()) for c in crates],
        )


def load_manifest(path: str | Path) -> Manifest:
    """
    Load a YAML or JSON manifest.

    Raises:
        ManifestError: unreadable file, parse error, or schema violation.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ManifestError(f"Cannot parse manifest {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {path} must contain a mapping at the top level")

    try:
        manifest = Manifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestError(f"Invalid manifest {path}:\n{exc}") from exc

    if not manifest.name:
        manifest.name = path.stem
    return manifest


def save_manifest(manifest: Manifest, path: str | Path) -> None:
    """Write a manifest as YAML or JSON, chosen by file extension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = manifest.model_dump()

    with path.open("w", encoding="utf-8") as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            yaml.safe_dump(data, f, sort_keys=False)
        else:
            json.dump(data, f, indent=2)


def generate_crates(
    count: int,
    truck: Truck,
    min_dim: int = 1,
    max_dim: Optional[int] = None,
    seed: Optional[int] = None,
) -> List[Crate]:
    """
    Generate random crates for experimentation.

    Dimensions are drawn uniformly from [min_dim, max_dim].  max_dim
    defaults to half the smallest truck dimension and is capped at the
    largest one.  Crate ids run from 1 upward.

    Generation stops early when the next crate would push the total crate
    volume past the truck volume, so fewer than ``count`` crates may be
    returned.
    """
    if max_dim is None:
        max_dim = max(min_dim, min(truck.dimensions) // 2)
    upper = min(max_dim, max(truck.dimensions))
    if min_dim < 1 or min_dim > upper:
        raise ValueError(f"Invalid dimension range [{min_dim}, {upper}]")

    rng = random.Random(seed)
    crates: List[Crate] = []
    total_volume = 0
    for i in range(1, count + 1):
        crate = Crate(
            crate_id=i,
            width=rng.randint(min_dim, upper),
            height=rng.randint(min_dim, upper),
            length=rng.randint(min_dim, upper),
        )
        if total_volume + crate.volume > truck.volume:
            break
        crates.append(crate)
        total_volume += crate.volume
    return crates
