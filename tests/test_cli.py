import json
from pathlib import Path

from acl_policy.cli import describe_document, main
from acl_policy.schemas import NodeRule, PolicyDocument

FIXTURES = Path(__file__).parent / "fixtures"


def test_text_output_lists_non_empty_categories(capsys) -> None:
    exit_code = main([str(FIXTURES / "acl_policy1.hcl")])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert out.splitlines() == [
        "PARSED CONFIG",
        "default acl: read",
        "** node policies **",
        '  name="test" policy="write"',
        "** node prefix policies **",
        '  name="windows" policy="write"',
        "** service policies **",
        '  name="Database" policy="write"',
        "** service prefix policies **",
        '  name="APIService" policy="read"',
    ]


def test_empty_categories_are_omitted() -> None:
    document = PolicyDocument(default_acl="deny", nodes=[NodeRule(name="a", policy="read")])
    assert describe_document(document) == 'PARSED CONFIG\ndefault acl: deny\n** node policies **\n  name="a" policy="read"\n'


def test_errors_exit_non_zero(capsys, monkeypatch) -> None:
    monkeypatch.chdir(FIXTURES)
    exit_code = main(["acl_policy2.hcl"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert captured.out == ""
    lines = captured.err.splitlines()
    assert lines[0] == "error parsing file:"
    assert lines[1].startswith("acl_policy2.hcl:3,3-7: Unsupported block type")
    assert lines[2].endswith('Did you mean "node_prefix"?')


def test_missing_file_exit_non_zero(capsys, tmp_path: Path) -> None:
    exit_code = main([str(tmp_path / "missing.hcl")])
    assert exit_code == 1
    assert "Failed to read file" in capsys.readouterr().err


def test_warnings_do_not_fail(capsys, tmp_path: Path) -> None:
    path = tmp_path / "p.hcl"
    path.write_text('policy { acl = "read" }\npolicy { acl = "write" }\n')
    exit_code = main([str(path)])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "warning:" in captured.err
    assert "Duplicate policy block" in captured.err
    assert captured.out.startswith("PARSED CONFIG")


def test_json_output(capsys) -> None:
    exit_code = main([str(FIXTURES / "acl_policy1.hcl"), "--format", "json"])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["default_acl"] == "read"
    assert payload["services"] == [{"name": "Database", "policy": "write", "intentions": None}]


def test_hcl_output(capsys) -> None:
    exit_code = main([str(FIXTURES / "acl_policy1.hcl"), "--format", "hcl"])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert out.startswith('policy {\n  acl = "read"\n')
    assert 'service_prefix "APIService" {' in out


def test_settings_file_is_applied(capsys, tmp_path: Path, monkeypatch) -> None:
    settings = tmp_path / "settings.yaml"
    settings.write_text("suggestion_cutoff: 1.0\n")
    monkeypatch.chdir(FIXTURES)
    exit_code = main(["acl_policy2.hcl", "--config", str(settings)])

    assert exit_code == 1
    assert "Did you mean" not in capsys.readouterr().err


def test_bad_settings_file_exits_2(capsys, tmp_path: Path) -> None:
    exit_code = main([str(FIXTURES / "acl_policy1.hcl"), "--config", str(tmp_path / "missing.yaml")])
    assert exit_code == 2
    assert "error: Failed to load missing.yaml: File not found" in capsys.readouterr().err


def test_cli_error_serialization() -> None:
    from acl_policy.cli import CliError

    error = CliError("bad settings")
    assert str(error) == "bad settings"
    assert error.to_dict() == {"message": "bad settings", "exit_code": 2}
