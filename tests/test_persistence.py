from pathlib import Path

from src.courier_routing.persistence.filesystem import FileStorage


def test_file_storage_creates_run_directory(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="route_test")

    assert run_dir.exists()
    assert run_dir.is_dir()
    assert run_dir.parent == tmp_path / "outputs"
    assert run_dir.name.startswith("route_test_")


def test_consecutive_runs_get_distinct_directories(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)

    first = storage.make_run_directory()
    second = storage.make_run_directory()

    assert first != second


def test_file_storage_writes_json_and_csv(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="route_test")

    summary_path = run_dir / "summary.json"
    segments_path = run_dir / "segments.csv"

    storage.write_json(summary_path, {"arrêt": "Plateau"})
    storage.write_csv(segments_path, "a,b\n1,2\n")

    assert summary_path.read_text(encoding="utf-8") == '{\n  "arrêt": "Plateau"\n}'
    assert segments_path.read_text(encoding="utf-8") == "a,b\n1,2\n"


def test_run_directory_prefix_cannot_leave_outputs(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path / "root")

    run_dir = storage.make_run_directory(prefix="route_x/../../../escaped")

    assert run_dir.parent == (tmp_path / "root" / "outputs").resolve()
    assert run_dir.name.startswith("route_x" + "_" * 10 + "escaped_")
    assert list(tmp_path.iterdir()) == [tmp_path / "root"]
