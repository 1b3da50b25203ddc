"""CLI root resolution, filtering and file output tests.

Verifies how ``ponder.cli.main`` picks the workspace root and what it prints.
Each test isolates the JSON config in a temporary directory.
"""

from __future__ import annotations

import io
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from ponder import cli
from ponder.runtime import config
from ponder.tree_model.rendering import display_workspace_path


def _make_workspace(root: Path) -> None:
    (root / "src").mkdir()
    (root / "src" / "app.py").write_text("print('hi')\n", encoding="utf-8")
    (root / "README.md").write_text("# hi", encoding="utf-8")


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        base = Path(self._tmp.name).resolve()
        self.root = base / "workspace"
        self.root.mkdir()
        _make_workspace(self.root)
        self.config_path = base / "config" / "config.json"
        patcher = mock.patch("ponder.runtime.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def run_cli(self, *argv: str, default_path: Path | None = None) -> tuple[str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with (
            mock.patch.object(sys, "argv", ["ponder", *argv]),
            mock.patch("sys.stdout", stdout),
            mock.patch("sys.stderr", stderr),
        ):
            cli.main(default_path=default_path)
        return stdout.getvalue(), stderr.getvalue()


class CliTreeOutputTests(CliTestCase):
    def test_prints_collapsed_tree_for_explicit_root(self) -> None:
        out, err = self.run_cli(str(self.root), "--no-color", "--no-remember")

        self.assertEqual(err, "")
        self.assertEqual(
            out,
            f"{display_workspace_path(str(self.root))}\n▸ src/\n  README.md [4 B]\n",
        )

    def test_filter_auto_expands_to_matches(self) -> None:
        out, _err = self.run_cli(str(self.root), "--no-color", "--no-remember", "--filter", "APP")

        self.assertEqual(out.splitlines()[1:], ["▾ src/", "    app.py [12 B]"])

    def test_open_prints_numbered_content_and_reveals_file(self) -> None:
        out, _err = self.run_cli(str(self.root), "--no-color", "--no-remember", "--open", "src/app.py")

        lines = out.splitlines()
        self.assertEqual(lines[1:4], ["▾ src/", "  >   app.py [12 B]", "  README.md [4 B]"])
        self.assertTrue(out.endswith("\napp.py  python  2 lines\n1 print('hi')\n2 \n"))

    def test_size_labels_follow_config(self) -> None:
        config.save_config({"show_size_labels": False})
        out, _err = self.run_cli(str(self.root), "--no-color", "--no-remember")
        self.assertEqual(out.splitlines()[1:], ["▸ src/", "  README.md"])


class CliRootResolutionTests(CliTestCase):
    def test_successful_load_is_remembered_and_reused(self) -> None:
        self.run_cli(str(self.root), "--no-color")
        self.assertEqual(config.load_last_root(), str(self.root))

        out, _err = self.run_cli("--no-color", default_path=Path("/nonexistent-default"))
        self.assertEqual(out.splitlines()[0], display_workspace_path(str(self.root)))

    def test_no_remember_skips_reading_and_writing_last_root(self) -> None:
        other = self.root / "src"
        config.save_last_root(str(other))

        out, _err = self.run_cli("--no-color", "--no-remember", default_path=self.root)

        self.assertEqual(out.splitlines()[0], display_workspace_path(str(self.root)))
        self.assertEqual(config.load_last_root(), str(other))

    def test_missing_root_exits_with_tree_error(self) -> None:
        missing = self.root / "missing"
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli(str(missing), "--no-remember")
        self.assertEqual(ctx.exception.code, 1)
        self.assertIsNone(config.load_last_root())


class CliFileErrorTests(CliTestCase):
    def test_open_path_outside_tree_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli(str(self.root), "--no-remember", "--open", "nope.txt")
        self.assertEqual(ctx.exception.code, "Not in workspace: nope.txt")

    def test_binary_file_reports_error_on_stderr(self) -> None:
        (self.root / "blob.bin").write_bytes(b"\x00\x01\x02")
        stderr = io.StringIO()
        with (
            mock.patch.object(
                sys,
                "argv",
                ["ponder", str(self.root), "--no-color", "--no-remember", "--open", "blob.bin"],
            ),
            mock.patch("sys.stdout", io.StringIO()),
            mock.patch("sys.stderr", stderr),
            self.assertRaises(SystemExit) as ctx,
        ):
            cli.main()

        self.assertEqual(ctx.exception.code, 1)
        self.assertEqual(stderr.getvalue(), "blob.bin\nFailed to read file\nCannot display binary file\n")

    def test_max_bytes_limit_is_enforced(self) -> None:
        stderr = io.StringIO()
        with (
            mock.patch.object(
                sys,
                "argv",
                ["ponder", str(self.root), "--no-color", "--no-remember", "--open", "src/app.py", "--max-bytes", "4"],
            ),
            mock.patch("sys.stdout", io.StringIO()),
            mock.patch("sys.stderr", stderr),
            self.assertRaises(SystemExit),
        ):
            cli.main()

        self.assertIn("File too large: 12 bytes (max: 4 bytes)", stderr.getvalue())

    def test_invalid_max_bytes_is_rejected_by_parser(self) -> None:
        with (
            mock.patch.object(sys, "argv", ["ponder", str(self.root), "--max-bytes", "0"]),
            mock.patch("sys.stderr", io.StringIO()),
            self.assertRaises(SystemExit) as ctx,
        ):
            cli.main()
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
