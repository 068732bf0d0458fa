# unit/test_cli.py

import json
from pathlib import Path

import pytest

from schema_audit.cli import EXIT_FINDINGS, EXIT_OK, EXIT_PARSE_ERROR, main

pytestmark = pytest.mark.unit

_FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"
_SCHEMAS = _FIXTURES / "schemas"
_INVARIANTS = _FIXTURES / "invariants"


def test_main_clean_schema_exits_ok(capsys: pytest.CaptureFixture[str]) -> None:
    """
    ARRANGE: fk-with-index.sql with no findings
    ACT:     main
    ASSERT:  exit code 0 and text report on stdout
    """
    actual = main(["--schema", str(_SCHEMAS / "fk-with-index.sql")])

    assert actual == EXIT_OK
    assert "No normalisation findings." in capsys.readouterr().out


def test_main_info_findings_pass_default_threshold() -> None:
    """
    ARRANGE: basic.sql with only an informational FK index finding
    ACT:     main with the default --fail-on warning
    ASSERT:  exit code 0
    """
    actual = main(["--schema", str(_SCHEMAS / "basic.sql")])

    assert actual == EXIT_OK


def test_main_fail_on_info_counts_info_findings() -> None:
    """
    ARRANGE: basic.sql with an informational finding
    ACT:     main with --fail-on info
    ASSERT:  exit code 1
    """
    actual = main(["--schema", str(_SCHEMAS / "basic.sql"), "--fail-on", "info"])

    assert actual == EXIT_FINDINGS


def test_main_warning_findings_exit_one() -> None:
    """
    ARRANGE: 2nf-violations.sql with 2NF warnings
    ACT:     main
    ASSERT:  exit code 1
    """
    actual = main(["--schema", str(_SCHEMAS / "2nf-violations.sql")])

    assert actual == EXIT_FINDINGS


def test_main_malformed_schema_exits_three() -> None:
    """
    ARRANGE: malformed.sql
    ACT:     main
    ASSERT:  exit code 3
    """
    actual = main(["--schema", str(_SCHEMAS / "malformed.sql")])

    assert actual == EXIT_PARSE_ERROR


def test_main_malformed_invariants_exits_three() -> None:
    """
    ARRANGE: valid schema with malformed.json invariants
    ACT:     main
    ASSERT:  exit code 3
    """
    actual = main(
        [
            "--schema",
            str(_SCHEMAS / "basic.sql"),
            "--invariants",
            str(_INVARIANTS / "malformed.json"),
        ],
    )

    assert actual == EXIT_PARSE_ERROR


def test_main_unsupported_extension_exits_three(tmp_path: Path) -> None:
    """
    ARRANGE: schema file with a .txt extension
    ACT:     main
    ASSERT:  exit code 3
    """
    schema = tmp_path / "schema.txt"
    schema.write_text("CREATE TABLE t (id INT);", encoding="utf-8")

    actual = main(["--schema", str(schema)])

    assert actual == EXIT_PARSE_ERROR


def test_main_invalid_utf8_schema_exits_three(tmp_path: Path) -> None:
    """
    ARRANGE: schema.sql holding a byte that is not valid UTF-8
    ACT:     main
    ASSERT:  exit code 3
    """
    schema = tmp_path / "schema.sql"
    schema.write_bytes(b"CREATE TABLE t (id INT PRIMARY KEY); \xff")

    actual = main(["--schema", str(schema)])

    assert actual == EXIT_PARSE_ERROR


def test_main_missing_schema_argument_exits_two() -> None:
    """
    ARRANGE: no --schema argument
    ACT:     main
    ASSERT:  SystemExit with code 2
    """
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 2


def test_main_json_format_is_parseable(capsys: pytest.CaptureFixture[str]) -> None:
    """
    ARRANGE: basic.sql
    ACT:     main with --format json --no-timestamp
    ASSERT:  stdout parses with a null timestamp
    """
    main(
        ["--schema", str(_SCHEMAS / "basic.sql"), "--format", "json", "--no-timestamp"],
    )

    payload = json.loads(capsys.readouterr().out)

    assert payload["metadata"]["timestamp"] is None


def test_main_out_writes_report_file(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """
    ARRANGE: destination path under tmp_path
    ACT:     main with --out
    ASSERT:  report written to file, nothing on stdout
    """
    destination = tmp_path / "audit.json"

    main(
        [
            "--schema",
            str(_SCHEMAS / "basic.sql"),
            "--format",
            "json",
            "--out",
            str(destination),
        ],
    )

    assert json.loads(destination.read_text(encoding="utf-8"))["findings"]
    assert capsys.readouterr().out == ""


def test_main_generate_invariants(capsys: pytest.CaptureFixture[str]) -> None:
    """
    ARRANGE: basic.sql
    ACT:     main with --generate-invariants
    ASSERT:  exit 0 and seeded User dependencies on stdout
    """
    actual = main(["--schema", str(_SCHEMAS / "basic.sql"), "--generate-invariants"])

    payload = json.loads(capsys.readouterr().out)

    assert actual == EXIT_OK
    assert "functionalDependencies" in payload["User"]


def test_main_key_backed_invariants_stay_clean(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """
    ARRANGE: fk-with-index.sql with basic-invariants.json (email -> name)
    ACT:     main with --format json
    ASSERT:  exit 0 and no findings, since email is unique
    """
    actual = main(
        [
            "--schema",
            str(_SCHEMAS / "fk-with-index.sql"),
            "--invariants",
            str(_INVARIANTS / "basic-invariants.json"),
            "--format",
            "json",
        ],
    )

    assert actual == EXIT_OK
    assert json.loads(capsys.readouterr().out)["findings"] == []
