from __future__ import annotations

import textwrap
from pathlib import Path

from heading_decorator.cli import cli
from heading_decorator.filesystem import MAX_FILE_SIZE_ENV_VAR


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


GUIDE = """
# Guide

## Install
Some text.

### From source

## Usage
"""


def test_cli_prints_decorated_headings(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "guide.md", GUIDE)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "1 # Guide\n1.1 ## Install\n1.1.1 ### From source\n1.2 ## Usage\n"
    assert target.read_text(encoding="utf-8").startswith("# Guide")


def test_cli_full_document(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "guide.md", "# Guide\nIntro\n## Install\n")

    result = cli_runner.invoke(cli, ["--full", "--position", "before-inside", str(target)])

    assert result.exit_code == 0
    assert result.output == "# 1 Guide\nIntro\n## 1.1 Install\n"


def test_cli_option_overrides(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "guide.md", GUIDE)

    result = cli_runner.invoke(
        cli,
        [
            "--ignore-single",
            "--style",
            "upper-roman",
            "--delimiter",
            "-",
            "--max-level",
            "2",
            "--position",
            "after",
            str(target),
        ],
    )

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "# Guide",
        "## Install I",
        "### From source I",
        "## Usage II",
    ]


def test_cli_unordered_mode(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "guide.md", "# A\n## B\n")

    result = cli_runner.invoke(cli, ["--mode", "unordered", str(target)])

    assert result.exit_code == 0
    assert result.output == "H1 # A\nH2 ## B\n"


def test_cli_uses_pyproject_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.heading-decorator]
        decorator_mode = "splice"
        position = "before-inside"

        [tool.heading-decorator.splice.h1]
        style_type = "upper-alpha"
        """,
    )
    target = _write(tmp_path, "guide.md", "# A\n## B\n# C\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "# A A\n## A.1 B\n# B C\n"


def test_cli_options_override_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.heading-decorator]
        ordered_based_on_existing = true
        """,
    )
    target = _write(tmp_path, "guide.md", "## A\n### B\n")

    result = cli_runner.invoke(cli, [str(target)])
    assert result.output == "## A\n1 ### B\n"

    result = cli_runner.invoke(cli, ["--no-based-on-existing", str(target)])
    assert result.output == "1 ## A\n1.1 ### B\n"


def test_cli_rejects_invalid_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.heading-decorator]
        unknown = 1
        """,
    )
    target = _write(tmp_path, "guide.md", "# A\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 2
    assert "Unsupported keys" in result.output


def test_cli_rejects_non_markdown_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "notes.txt", "# A\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 2
    assert "not a Markdown file" in result.output


def test_cli_rejects_missing_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, ["missing.md"])

    assert result.exit_code == 2


def test_cli_reports_file_too_large(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "4")
    target = _write(tmp_path, "guide.md", GUIDE)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "exceeds the maximum allowed size of 4 bytes" in result.output


def test_cli_reports_invalid_size_environment(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "lots")
    target = _write(tmp_path, "guide.md", GUIDE)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert MAX_FILE_SIZE_ENV_VAR in result.output


def test_cli_respects_front_matter_opt_out(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(
        tmp_path,
        "guide.md",
        """
        ---
        heading: false
        ---
        # A
        """,
    )

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert "Decoration is disabled for guide.md" in result.output
    assert "# A" not in result.output


def test_cli_force_ignores_opt_out(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "guide.md", "---\nheading: false\n---\n# A\n")

    result = cli_runner.invoke(cli, ["--force", str(target)])

    assert result.exit_code == 0
    assert result.output == "1 # A\n"


def test_cli_respects_folder_blocklist(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.heading-decorator]
        folder_blocklist = ["drafts"]
        """,
    )
    target = _write(tmp_path, "drafts/guide.md", "# A\n")

    result = cli_runner.invoke(cli, ["--full", str(target)])

    assert result.exit_code == 0
    assert "Decoration is disabled for guide.md" in result.output
    assert "# A\n" in result.output
    assert "1 # A" not in result.output


def test_cli_custom_metadata_keyword(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.heading-decorator]
        metadata_keyword = "numbering"
        """,
    )
    target = _write(tmp_path, "guide.md", "---\nnumbering: off\nheading: on\n---\n# A\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert "Decoration is disabled" in result.output


def test_cli_verbose_logs_debug(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "guide.md", "# A\n")

    result = cli_runner.invoke(cli, ["--verbose", str(target)])

    assert result.exit_code == 0
    assert "1 # A" in result.output
