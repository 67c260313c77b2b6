"""Tests for manifest loading, saving and crate generation."""

import json

import pytest

from truckload.core.models import Crate, Truck
from truckload.runner.manifest import (
    Manifest,
    ManifestError,
    generate_crates,
    load_manifest,
    save_manifest,
)

YAML_MANIFEST = """\
name: week-12
truck: {width: 4, height: 3, length: 5}
crates:
  - {id: 1, width: 2, height: 1, length: 3}
  - {CrateID: 2, Width: 1, Height: 1, Length: 1}
"""


class TestLoadManifest:
    def test_yaml_with_aliases(self, tmp_path):
        path = tmp_path / "week12.yaml"
        path.write_text(YAML_MANIFEST, encoding="utf-8")

        manifest = load_manifest(path)

        assert manifest.name == "week-12"
        assert manifest.to_truck() == Truck(4, 3, 5)
        assert manifest.to_crates() == [Crate(1, 2, 1, 3), Crate(2, 1, 1, 1)]

    def test_json(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps({
            "truck": {"width": 2, "height": 1, "length": 1},
            "crates": [{"crate_id": 5, "width": 1, "height": 1, "length": 1}],
        }), encoding="utf-8")

        manifest = load_manifest(path)

        assert manifest.name == "plan"  # defaults to the file stem
        assert manifest.to_crates() == [Crate(5, 1, 1, 1)]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="Cannot read"):
            load_manifest(tmp_path / "absent.yaml")

    def test_unparseable_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("truck: [1, 2\n", encoding="utf-8")
        with pytest.raises(ManifestError, match="Cannot parse"):
            load_manifest(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ManifestError, match="mapping"):
            load_manifest(path)

    @pytest.mark.parametrize("crate", [
        {"id": 1, "width": 0, "height": 1, "length": 1},
        {"id": 1, "width": 1, "height": -1, "length": 1},
        {"width": 1, "height": 1, "length": 1},
    ])
    def test_schema_violations(self, tmp_path, crate):
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps({
            "truck": {"width": 2, "height": 2, "length": 2},
            "crates": [crate],
        }), encoding="utf-8")
        with pytest.raises(ManifestError, match="Invalid manifest"):
            load_manifest(path)

    def test_duplicate_crate_ids(self, tmp_path):
        path = tmp_path / "dupes.yaml"
        path.write_text(
            "truck: {width: 2, height: 2, length: 2}\n"
            "crates:\n"
            "  - {id: 1, width: 1, height: 1, length: 1}\n"
            "  - {id: 1, width: 1, height: 1, length: 1}\n",
            encoding="utf-8",
        )
        with pytest.raises(ManifestError, match="duplicate crate id 1"):
            load_manifest(path)

    def test_manifest_error_is_value_error(self):
        assert issubclass(ManifestError, ValueError)


class TestSaveManifest:
    @pytest.mark.parametrize("filename", ["out.yaml", "out.json"])
    def test_save_then_load(self, tmp_path, filename):
        truck = Truck(4, 3, 5)
        crates = [Crate(1, 2, 1, 3), Crate(2, 1, 1, 1)]
        path = tmp_path / "nested" / filename

        save_manifest(Manifest.from_models(truck, crates, name="saved"), path)
        loaded = load_manifest(path)

        assert loaded.name == "saved"
        assert loaded.to_truck() == truck
        assert loaded.to_crates() == crates


class TestGenerateCrates:
    def test_seeded_generation_is_reproducible(self):
        truck = Truck(6, 6, 6)
        assert generate_crates(10, truck, seed=3) == generate_crates(10, truck, seed=3)

    def test_dimensions_within_range(self):
        crates = generate_crates(50, Truck(10, 40, 60), min_dim=2, max_dim=5, seed=1)
        assert [c.crate_id for c in crates] == list(range(1, 51))
        for crate in crates:
            for value in (crate.width, crate.height, crate.length):
                assert 2 <= value <= 5

    def test_max_dim_capped_at_truck(self):
        crates = generate_crates(30, Truck(3, 20, 20), max_dim=50, seed=0)
        assert len(crates) == 30
        assert max(max(c.width, c.height, c.length) for c in crates) <= 20

    def test_default_max_dim_is_half_smallest_truck_dimension(self):
        crates = generate_crates(20, Truck(10, 8, 20), seed=7)
        assert len(crates) == 20
        assert max(max(c.width, c.height, c.length) for c in crates) <= 4

    def test_stops_before_exceeding_truck_volume(self):
        truck = Truck(4, 4, 4)
        crates = generate_crates(100, truck, seed=0)
        assert 0 < len(crates) < 100
        assert sum(c.volume for c in crates) <= truck.volume
        assert [c.crate_id for c in crates] == list(range(1, len(crates) + 1))

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            generate_crates(5, Truck(3, 3, 3), min_dim=4)
