"""Unit tests for the command line interface."""

import json

import pytest

from sheet_export.cli import build_parser, main

SNAPSHOT = {
    "components": [
        {
            "id": "root",
            "name": "promo sheet",
            "type": "container",
            "position": {"width": 300, "height": 200},
            "style": {"backgroundColor": "#FFFFFF"},
            "childIds": ["hello"],
        },
        {
            "id": "hello",
            "type": "text",
            "position": {"x": 10, "y": 10, "width": 120, "height": 24},
            "style": {"color": "#111827", "fontSize": 16},
            "content": {"text": "Hello"},
        },
    ],
    "rootIds": ["root"],
}


@pytest.fixture
def snapshot_file(tmp_path):
    """Snapshot written to a temporary JSON file."""
    path = tmp_path / "sheet.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return path


@pytest.fixture
def cyclic_file(tmp_path):
    path = tmp_path / "cycle.json"
    components = [
        {"id": "a", "type": "container", "childIds": ["b"]},
        {"id": "b", "type": "container", "childIds": ["a"]},
    ]
    path.write_text(
        json.dumps({"components": components, "rootIds": ["a"]}), encoding="utf-8"
    )
    return path


class TestExportCommands:
    """Tests for the svg, react and flutter commands."""

    @pytest.mark.unit
    def test_svg_to_stdout(self, snapshot_file, capsys):
        """SVG is printed for the first root by default."""
        assert main(["svg", str(snapshot_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("<svg ")
        assert '<text fill="#111827">Hello</text>' in out

    @pytest.mark.unit
    def test_react_dialect(self, snapshot_file, capsys):
        """--dialect selects the React styling dialect."""
        assert main(["react", str(snapshot_file), "--dialect", "css-modules"]) == 0
        assert "PromoSheet.module.css" in capsys.readouterr().out

    @pytest.mark.unit
    def test_flutter_theme_to_file(self, snapshot_file, tmp_path):
        """-o writes the generated source to a file."""
        target = tmp_path / "promo_sheet.dart"
        code = main(
            ["flutter", str(snapshot_file), "--theme", "cupertino", "-o", str(target)]
        )
        assert code == 0
        dart = target.read_text(encoding="utf-8")
        assert "class PromoSheet extends StatelessWidget" in dart
        assert "package:flutter/cupertino.dart" in dart

    @pytest.mark.unit
    def test_target(self, snapshot_file, capsys):
        """--target exports a nested component."""
        assert main(["svg", str(snapshot_file), "--target", "hello"]) == 0
        assert 'width="120" height="24"' in capsys.readouterr().out

    @pytest.mark.unit
    def test_summary(self, snapshot_file, capsys):
        """--summary prints the tree to stderr and keeps stdout clean."""
        assert main(["svg", str(snapshot_file), "--summary"]) == 0
        captured = capsys.readouterr()
        assert captured.out.startswith("<svg ")
        assert "promo sheet [container, 300x200]" in captured.err
        assert "0 warning(s), svg/default" in captured.err

    @pytest.mark.unit
    def test_cycle_fails(self, cyclic_file):
        """Structural errors give exit code 1."""
        assert main(["react", str(cyclic_file)]) == 1

    @pytest.mark.unit
    def test_unknown_target_fails(self, snapshot_file):
        assert main(["svg", str(snapshot_file), "--target", "nope"]) == 1

    @pytest.mark.unit
    def test_missing_file_fails(self, tmp_path):
        """Unreadable snapshots give exit code 1."""
        assert main(["svg", str(tmp_path / "absent.json")]) == 1

    @pytest.mark.unit
    def test_invalid_json_fails(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert main(["svg", str(path)]) == 1

    @pytest.mark.unit
    def test_empty_snapshot_fails(self, tmp_path):
        """A snapshot without roots needs an explicit target."""
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"components": []}), encoding="utf-8")
        assert main(["svg", str(path)]) == 1


class TestTreeAndValidate:
    """Tests for the tree and validate commands."""

    @pytest.mark.unit
    def test_tree(self, snapshot_file, capsys):
        """tree prints the component tree."""
        assert main(["tree", str(snapshot_file)]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "promo sheet [container, 300x200]",
            "└── hello [text, 120x24]",
        ]

    @pytest.mark.unit
    def test_validate_ok(self, snapshot_file, capsys):
        """A clean snapshot validates with exit code 0."""
        assert main(["validate", str(snapshot_file)]) == 0
        assert "2 components, no problems found" in capsys.readouterr().out

    @pytest.mark.unit
    def test_validate_reports_problems(self, cyclic_file, capsys):
        """Problems are listed and give exit code 1."""
        assert main(["validate", str(cyclic_file)]) == 1
        out = capsys.readouterr().out
        assert "a: [cycle] Cycle detected: a -> b -> a" in out
        assert "1 problem(s) found" in out


class TestEnvAndUsage:
    """Tests for the env command and argument handling."""

    @pytest.mark.unit
    def test_env_category(self, capsys, monkeypatch):
        """env shows current values for one category."""
        monkeypatch.setenv("SHEET_EXPORT_FLUTTER_THEME", "cupertino")
        assert main(["env", "--category", "flutter"]) == 0
        out = capsys.readouterr().out
        assert "[flutter]" in out
        assert "SHEET_EXPORT_FLUTTER_THEME=cupertino" in out
        assert "SHEET_EXPORT_REACT_DIALECT" not in out

    @pytest.mark.unit
    def test_env_unknown_category(self):
        assert main(["env", "--category", "gpu"]) == 1

    @pytest.mark.unit
    def test_no_command(self, capsys):
        """Without a command, help is printed and the exit code is 1."""
        assert main([]) == 1
        assert "usage: sheet-export" in capsys.readouterr().out

    @pytest.mark.unit
    def test_bad_dialect(self, snapshot_file):
        """Usage errors give exit code 1."""
        assert main(["react", str(snapshot_file), "--dialect", "vue"]) == 1

    @pytest.mark.unit
    def test_parser_commands(self):
        """Every export format has a subcommand."""
        parser = build_parser()
        for command in ("svg", "react", "flutter"):
            args = parser.parse_args([command, "sheet.json"])
            assert args.command == command
            assert args.target is None
