"""Unit tests for the store CLI commands.

Tests for dirkit store list, get, set, rm and mv.
"""

import json
from pathlib import Path

import pytest
from dirkit.cli.main import app
from dirkit.core.store import KeyValueStore
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def store_path(xdg_dirs: dict[str, str]) -> Path:
    """Location of the default store under the temporary XDG state home."""
    return Path(xdg_dirs["XDG_STATE_HOME"]) / "dirkit" / "store.json"


class TestStoreSetGet:
    """Tests for store set and get."""

    def test_set_then_get(self, store_path: Path) -> None:
        """A stored string is printed back."""
        assert runner.invoke(app, ["store", "set", "greeting", "hello"]).exit_code == 0

        result = runner.invoke(app, ["store", "get", "greeting"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "hello"
        assert store_path.exists()

    def test_json_and_compress(self, store_path: Path) -> None:
        """JSON values survive compression."""
        value = {"volume": 80, "dash": True}
        runner.invoke(app, ["store", "set", "config", json.dumps(value), "--json", "-z"])

        result = runner.invoke(app, ["store", "get", "config", "--json", "--compress"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == value
        assert KeyValueStore(store_path).load("config", decompress=True, parse=True).data == value

    def test_set_invalid_json(self, store_path: Path) -> None:
        """--json rejects values that are not JSON."""
        result = runner.invoke(app, ["store", "set", "config", "{oops", "--json"])

        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_no_overwrite(self, store_path: Path) -> None:
        """--no-overwrite keeps an existing value."""
        runner.invoke(app, ["store", "set", "slot", "first"])

        result = runner.invoke(app, ["store", "set", "slot", "second", "--no-overwrite"])

        assert result.exit_code == 1
        assert KeyValueStore(store_path).load("slot").data == "first"

    def test_get_missing(self, store_path: Path) -> None:
        """Reading an unknown key fails."""
        result = runner.invoke(app, ["store", "get", "nope"])

        assert result.exit_code == 1
        assert "path not found" in result.output

    def test_get_undecodable(self, store_path: Path) -> None:
        """Decompressing a plain value fails with the stage status."""
        runner.invoke(app, ["store", "set", "plain", "text"])

        result = runner.invoke(app, ["store", "get", "plain", "--compress"])

        assert result.exit_code == 1
        assert "decode failed" in result.output

    def test_corrupted_store(self, store_path: Path) -> None:
        """A corrupted store file is reported."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text("[]")

        result = runner.invoke(app, ["store", "get", "x"])

        assert result.exit_code == 1
        assert "object of strings" in result.output


class TestStoreListRmMv:
    """Tests for store list, rm and mv."""

    def test_list(self, store_path: Path) -> None:
        """list prints the keys in order."""
        for key in ("b", "a"):
            runner.invoke(app, ["store", "set", key, "x"])

        result = runner.invoke(app, ["store", "list"])

        assert result.stdout.split() == ["a", "b"]

    def test_list_empty(self, store_path: Path) -> None:
        """An empty store is reported."""
        result = runner.invoke(app, ["store", "list"])

        assert result.exit_code == 0
        assert "Store is empty" in result.stdout

    def test_rm(self, store_path: Path) -> None:
        """rm deletes a key."""
        runner.invoke(app, ["store", "set", "slot", "x"])

        result = runner.invoke(app, ["store", "rm", "slot"])

        assert result.exit_code == 0
        assert KeyValueStore(store_path).keys() == []

    def test_rm_missing(self, store_path: Path) -> None:
        """rm of an unknown key fails."""
        assert runner.invoke(app, ["store", "rm", "slot"]).exit_code == 1

    def test_mv(self, store_path: Path) -> None:
        """mv renames a key."""
        runner.invoke(app, ["store", "set", "old", "v"])

        result = runner.invoke(app, ["store", "mv", "old", "new"])

        assert result.exit_code == 0
        assert KeyValueStore(store_path).keys() == ["new"]

    def test_mv_existing_target(self, store_path: Path) -> None:
        """mv refuses to replace a value without --force."""
        runner.invoke(app, ["store", "set", "old", "1"])
        runner.invoke(app, ["store", "set", "new", "2"])

        refused = runner.invoke(app, ["store", "mv", "old", "new"])
        forced = runner.invoke(app, ["store", "mv", "old", "new", "--force"])

        assert refused.exit_code == 1
        assert "overwrite not permitted" in refused.output
        assert forced.exit_code == 0
        assert KeyValueStore(store_path).load("new").data == "1"


class TestMarkupInKeys:
    """Tests for keys that look like Rich markup."""

    def test_set_rm_closing_tag(self, store_path: Path) -> None:
        """A key shaped like a closing tag is stored and removed."""
        stored = runner.invoke(app, ["store", "set", "[/x]", "v"])
        removed = runner.invoke(app, ["store", "rm", "[/x]"])

        assert stored.exit_code == 0
        assert "Stored [/x]" in stored.output
        assert removed.exit_code == 0
        assert "Removed [/x]" in removed.output

    def test_mv_style_tag(self, store_path: Path) -> None:
        """A key shaped like a style tag is printed literally."""
        runner.invoke(app, ["store", "set", "plain", "v"])

        result = runner.invoke(app, ["store", "mv", "plain", "[bold]"])

        assert result.exit_code == 0
        assert "Renamed plain to [bold]" in result.output
        assert KeyValueStore(store_path).keys() == ["[bold]"]

    def test_missing_key_in_error(self, store_path: Path) -> None:
        """Error messages show the key literally."""
        result = runner.invoke(app, ["store", "get", "[/nope]"])

        assert result.exit_code == 1
        assert "path not found: [/nope]" in result.output
