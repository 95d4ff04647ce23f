"""
cli.py のテスト（typer CliRunner）
"""

import pytest
from typer.testing import CliRunner

from prettylinks.cli import app
from prettylinks.config import RULES_ENV_VAR
from prettylinks.core.rules import Rule
from prettylinks.utils.store import FileRuleStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_env(monkeypatch):
    monkeypatch.delenv(RULES_ENV_VAR, raising=False)


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / "rules.yaml"
    FileRuleStore(path).save([Rule("_", " "), Rule(r"^\d+ ", "")])
    return path


@pytest.fixture
def vault(tmp_path):
    root = tmp_path / "vault"
    (root / "notes").mkdir(parents=True)
    (root / "index.md").write_text(
        "# Index\n\n- [[01_My_Page]]\n- [[Kept|Custom title]]\n", encoding="utf-8"
    )
    (root / "notes" / "plain.md").write_text("no links here\n", encoding="utf-8")
    return root


class TestPrettify:

    def test_rewrites_directory(self, vault, rules_file):
        result = runner.invoke(app, ["prettify", str(vault), "--rules", str(rules_file)])
        assert result.exit_code == 0, result.output
        assert "Updated 1/2 file(s), 1 line(s)." in result.output
        assert (vault / "index.md").read_text(encoding="utf-8") == (
            "# Index\n\n- [[01_My_Page|My Page]]\n- [[Kept|Custom title]]\n"
        )
        assert (vault / "notes" / "plain.md").read_text(encoding="utf-8") == "no links here\n"

    def test_dry_run(self, vault, rules_file):
        before = (vault / "index.md").read_text(encoding="utf-8")
        result = runner.invoke(
            app, ["prettify", str(vault / "index.md"), "--rules", str(rules_file), "--dry-run"]
        )
        assert result.exit_code == 0, result.output
        assert "Would update" in result.output
        assert (vault / "index.md").read_text(encoding="utf-8") == before

    def test_discovers_rules_file(self, vault):
        FileRuleStore(vault / ".prettylinks.yaml").save([Rule("_", "-")])
        result = runner.invoke(app, ["prettify", str(vault / "index.md")])
        assert result.exit_code == 0, result.output
        assert "[[01_My_Page|01-My-Page]]" in (vault / "index.md").read_text(encoding="utf-8")

    def test_invalid_rule_skipped(self, vault, tmp_path):
        path = tmp_path / "bad.yaml"
        FileRuleStore(path).save([Rule("(", "x"), Rule("_", " ")])
        result = runner.invoke(app, ["prettify", str(vault / "index.md"), "--rules", str(path)])
        assert result.exit_code == 0, result.output
        assert "[[01_My_Page|01 My Page]]" in (vault / "index.md").read_text(encoding="utf-8")

    def test_broken_rules_file(self, vault, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("not: a list\n", encoding="utf-8")
        result = runner.invoke(app, ["prettify", str(vault), "--rules", str(path)])
        assert result.exit_code == 1

    def test_missing_path(self, tmp_path, rules_file):
        result = runner.invoke(app, ["prettify", str(tmp_path / "nope.md"), "--rules", str(rules_file)])
        assert result.exit_code != 0


class TestPreviewAndLinks:

    def test_preview(self, rules_file):
        result = runner.invoke(app, ["preview", "See [[My_Page]] and [[A|b]]", "--rules", str(rules_file)])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "See [[My_Page|My Page]] and [[A|b]]"

    def test_preview_without_rules(self, tmp_path):
        result = runner.invoke(app, ["preview", "[[Page]]", "--rules", str(tmp_path / "absent.yaml")])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "[[Page|Page]]"

    def test_links(self, vault):
        result = runner.invoke(app, ["links", str(vault / "index.md")])
        assert result.exit_code == 0, result.output
        assert ":3: 01_My_Page (no alias)" in result.output
        assert ":4: Kept (alias='Custom title')" in result.output


class TestRulesCommands:

    def test_list_empty(self, tmp_path):
        result = runner.invoke(app, ["rules", "list", "--rules", str(tmp_path / "r.yaml")])
        assert result.exit_code == 0
        assert "No rules defined." in result.output

    def test_add_set_list(self, tmp_path):
        path = tmp_path / "r.yaml"

        result = runner.invoke(app, ["rules", "add", "--rules", str(path)])
        assert result.exit_code == 0, result.output
        assert "Added rule 1." in result.output

        result = runner.invoke(
            app, ["rules", "set", "1", "--search", "_", "--replace", " ", "--rules", str(path)]
        )
        assert result.exit_code == 0, result.output

        assert FileRuleStore(path).load() == [Rule("_", " ")]

        result = runner.invoke(app, ["rules", "list", "--rules", str(path)])
        assert "1. search='_' replace=' '" in result.output

    def test_set_unknown_rule(self, tmp_path):
        path = tmp_path / "r.yaml"
        result = runner.invoke(app, ["rules", "set", "3", "--search", "x", "--rules", str(path)])
        assert result.exit_code == 2

    def test_set_requires_field(self, tmp_path):
        result = runner.invoke(app, ["rules", "set", "1", "--rules", str(tmp_path / "r.yaml")])
        assert result.exit_code == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
