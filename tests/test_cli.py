"""Tests for the plan runner and its command-line entry point."""

import csv
import json

import pytest

from truckload.config import RunConfig
from truckload.core.models import Crate, Truck
from truckload.runner import cli
from truckload.runner.cli import (
    EXIT_COMPLETE,
    EXIT_ERROR,
    EXIT_PARTIAL,
    export_file_stem,
    export_plan,
    main,
    run_plan,
)


def _write_manifest(tmp_path, truck, crates, name="manifest.json"):
    path = tmp_path / name
    path.write_text(json.dumps({
        "truck": dict(zip(("width", "height", "length"), truck)),
        "crates": [
            {"id": cid, "width": w, "height": h, "length": l}
            for cid, w, h, l in crates
        ],
    }), encoding="utf-8")
    return path


@pytest.fixture
def fitting_manifest(tmp_path):
    return _write_manifest(tmp_path, (2, 2, 2), [(1, 2, 2, 1), (2, 1, 1, 1)], "fits.json")


@pytest.fixture
def blocking_manifest(tmp_path):
    return _write_manifest(tmp_path, (3, 3, 1), [(1, 2, 2, 1), (2, 2, 2, 1)], "blocked.json")


class TestRunPlan:
    def test_run_contents(self, blocking_case):
        truck, crates = blocking_case
        run = run_plan(truck, crates, plan_id="p1")

        assert run["plan_id"] == "p1"
        assert run["truck"] == {"width": 3, "height": 3, "length": 1}
        assert set(run["instructions"]) == {"1"}
        assert run["instructions"]["1"]["LoadingStepNumber"] == 0
        assert run["unplaced"] == [2]
        assert len(run["steps"]) == 2
        assert run["metrics"]["crates_placed"] == 1
        assert run["plan_metrics"].crates_unplaced == 1
        assert run["result"].outcome(1) is not None

    def test_default_plan_id(self):
        run = run_plan(Truck(1, 1, 1), [Crate(1, 1, 1, 1)])
        assert run["plan_id"].startswith("plan_")

    def test_verbose_output(self, capsys):
        run_plan(Truck(1, 1, 1), [Crate(1, 1, 1, 1)], RunConfig(verbose=True), plan_id="p")
        out = capsys.readouterr().out
        assert "LOADING PLAN SUMMARY" in out
        assert "OK" in out


class TestExportPlan:
    @pytest.mark.parametrize("plan_id, stem", [
        ("week-12", "week-12"),
        ("a/b", "a_b"),
        ("../x", ".._x"),
        ("load 1:2", "load_1_2"),
        ("", "plan"),
    ])
    def test_file_stem(self, plan_id, stem):
        assert export_file_stem(plan_id) == stem

    def test_unsafe_plan_id_stays_in_output_dir(self, tmp_path):
        out_dir = tmp_path / "out"
        run = run_plan(Truck(1, 1, 1), [Crate(1, 1, 1, 1)], plan_id="../a/b")

        written = export_plan(run, RunConfig(output_dir=str(out_dir)))

        assert [p.name for p in written] == [".._a_b_plan.json", ".._a_b_instructions.csv"]
        assert all(p.parent == out_dir and p.exists() for p in written)
        assert not (tmp_path / "a").exists()


class TestMain:
    def test_complete_plan_writes_exports(self, tmp_path, fitting_manifest):
        out_dir = tmp_path / "out"
        code = main(["--manifest", str(fitting_manifest), "--output-dir", str(out_dir)])

        assert code == EXIT_COMPLETE
        data = json.loads((out_dir / "fits_plan.json").read_text())
        assert data["plan_id"] == "fits"
        assert "result" not in data and "plan_metrics" not in data
        assert set(data["instructions"]) == {"1", "2"}
        assert (out_dir / "fits_instructions.csv").exists()

    def test_partial_plan(self, tmp_path, blocking_manifest, capsys):
        code = main(["--manifest", str(blocking_manifest), "--output-dir", str(tmp_path / "out")])
        assert code == EXIT_PARTIAL
        assert "Unplaced crate ids: 2" in capsys.readouterr().out

    def test_volume_exceeded(self, tmp_path, capsys):
        path = _write_manifest(tmp_path, (1, 1, 1), [(1, 1, 1, 1), (2, 1, 1, 1)])
        code = main(["--manifest", str(path), "--output-dir", str(tmp_path / "out")])
        assert code == EXIT_ERROR
        assert "VolumeExceededError" in capsys.readouterr().out
        assert not (tmp_path / "out").exists()

    def test_invalid_manifest(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("truck: {width: 0, height: 1, length: 1}\n", encoding="utf-8")
        assert main(["--manifest", str(path), "--output-dir", str(tmp_path)]) == EXIT_ERROR

    def test_generated_crates(self, tmp_path):
        code = main([
            "--generate", "5", "--truck", "10", "8", "20", "--gen-max", "3",
            "--output-dir", str(tmp_path / "out"),
        ])
        assert code == EXIT_COMPLETE
        assert len(list((tmp_path / "out").glob("*.json"))) == 1

    def test_generated_crates_with_default_sizes(self, tmp_path):
        code = main([
            "--generate", "30", "--truck", "10", "8", "20", "--seed", "7",
            "--output-dir", str(tmp_path / "out"),
        ])
        assert code in (EXIT_COMPLETE, EXIT_PARTIAL)

    def test_manifest_in_output_dir_is_not_overwritten(self, tmp_path):
        path = _write_manifest(tmp_path, (2, 2, 2), [(1, 1, 1, 1)], "plan.json")
        original = path.read_text(encoding="utf-8")

        code = main(["--manifest", str(path), "--output-dir", str(tmp_path)])

        assert code == EXIT_COMPLETE
        assert path.read_text(encoding="utf-8") == original
        assert (tmp_path / "plan_plan.json").exists()

    def test_invalid_generation_range(self, tmp_path):
        code = main(["--generate", "3", "--truck", "2", "2", "2", "--gen-min", "5",
                     "--output-dir", str(tmp_path)])
        assert code == EXIT_ERROR

    def test_exports_disabled(self, tmp_path, fitting_manifest):
        out_dir = tmp_path / "out"
        main(["--manifest", str(fitting_manifest), "--output-dir", str(out_dir),
              "--no-json", "--no-csv"])
        assert not out_dir.exists()

    def test_include_origin(self, tmp_path, fitting_manifest):
        out_dir = tmp_path / "out"
        main(["--manifest", str(fitting_manifest), "--output-dir", str(out_dir),
              "--include-origin", "--no-json"])
        with (out_dir / "fits_instructions.csv").open(newline="") as f:
            rows = list(csv.DictReader(f))
        assert "OriginZ" in rows[0]

    def test_input_source_required(self):
        with pytest.raises(SystemExit):
            main([])

    def test_notifications(self, tmp_path, blocking_manifest, monkeypatch):
        sent = []

        async def fake_send(message, chat_id=None, token=None):
            sent.append(message)
            return True

        monkeypatch.setattr(cli, "send_telegram", fake_send)
        code = main(["--manifest", str(blocking_manifest), "--output-dir", str(tmp_path),
                     "--notify"])

        assert code == EXIT_PARTIAL
        assert [m.splitlines()[0] for m in sent] == [
            "🚚 Loading Plan Started",
            "⚠️ Loading Plan Partial",
            "📦 Unplaced Crates (blocked)",
        ]

    def test_no_notifications_by_default(self, tmp_path, fitting_manifest, monkeypatch):
        sent = []

        async def fake_send(message, chat_id=None, token=None):
            sent.append(message)
            return True

        monkeypatch.setattr(cli, "send_telegram", fake_send)
        main(["--manifest", str(fitting_manifest), "--output-dir", str(tmp_path)])
        assert sent == []
