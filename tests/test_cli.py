import json

import httpx

from cli import data, files, main, network, serve
from cli.dispatch import EXIT_FAILURE, EXIT_OK, run_app


def invoke(app, capsys, *args):
    code = run_app(app, list(args), prog_name="toolbelt-test")
    captured = capsys.readouterr()
    return code, captured.out, captured.err


# --- dispatch ---


def test_no_arguments_prints_help(capsys):
    code, out, _ = invoke(data.app, capsys)
    assert code == EXIT_OK
    assert "Usage" in out
    assert "json" in out


def test_help_command(capsys):
    code, out, _ = invoke(files.app, capsys, "help")
    assert code == EXIT_OK
    assert "move" in out


def test_unknown_command_fails(capsys):
    code, _, err = invoke(data.app, capsys, "bogus")
    assert code == EXIT_FAILURE
    assert "bogus" in err


def test_missing_argument_fails_with_message(capsys):
    code, out, err = invoke(data.app, capsys, "text", "reverse")
    assert code == EXIT_FAILURE
    assert out == ""
    assert "Error: missing string argument" in err


def test_umbrella_mounts_every_tool(capsys):
    code, out, _ = invoke(main.app, capsys, "data", "text", "uppercase", "abc")
    assert code == EXIT_OK
    assert out == "ABC\n"


def test_invalid_configuration_fails(capsys, monkeypatch):
    monkeypatch.setenv("TOOLBELT_SERVER_PORT", "not-a-port")
    code, _, err = invoke(data.app, capsys, "text", "trim", " x ")
    assert code == EXIT_FAILURE
    assert "invalid configuration" in err


# --- data ---


def test_json_commands(capsys):
    assert invoke(data.app, capsys, "json", "minify", '{ "a" : [1, 2] }')[1] == '{"a":[1,2]}\n'
    assert invoke(data.app, capsys, "json", "extract", "a.b", '{"a": {"b": "x"}}')[1] == "x\n"
    assert invoke(data.app, capsys, "json", "extract", "a", '{"a": {"b": 1}}')[1] == '{\n  "b": 1\n}\n'


def test_json_validate(capsys):
    code, out, _ = invoke(data.app, capsys, "json", "validate", "[1]")
    assert code == EXIT_OK
    assert "JSON string is valid" in out

    code, _, err = invoke(data.app, capsys, "json", "validate", "[1")
    assert code == EXIT_FAILURE
    assert "JSON string is invalid" in err


def test_json_extract_missing_path(capsys):
    code, _, err = invoke(data.app, capsys, "json", "extract", "a.c", '{"a": {}}')
    assert code == EXIT_FAILURE
    assert 'path "a.c" does not exist' in err


def test_json_merge(capsys, tmp_path):
    (tmp_path / "a.json").write_text('{"x": {"y": 1}}', encoding="utf-8")
    (tmp_path / "b.json").write_text('{"x": {"z": 2}}', encoding="utf-8")
    code, out, _ = invoke(data.app, capsys, "json", "merge", "a.json", "b.json")
    assert code == EXIT_OK
    assert json.loads(out) == {"x": {"y": 1, "z": 2}}


def test_csv_commands(capsys):
    code, out, _ = invoke(data.app, capsys, "csv", "parse", "a,b\n1,2")
    assert code == EXIT_OK
    assert json.loads(out) == [{"a": "1", "b": "2"}]
    assert invoke(data.app, capsys, "csv", "fromjson", '[{"a": 1, "b": 2}]')[1] == "a,b\n1,2\n"


def test_text_commands(capsys):
    assert invoke(data.app, capsys, "text", "split", ",", "a,b")[1] == '["a","b"]\n'
    assert invoke(data.app, capsys, "text", "join", "+", "[1, 2]")[1] == "1+2\n"
    assert invoke(data.app, capsys, "text", "count", "a", "banana")[1] == "3\n"
    assert invoke(data.app, capsys, "text", "length", "abc")[1] == "3\n"
    assert invoke(data.app, capsys, "text", "replace", "o", "0", "foo")[1] == "f00\n"


def test_encode_decode_hash(capsys):
    assert invoke(data.app, capsys, "encode", "base64", "hello")[1] == "aGVsbG8=\n"
    assert invoke(data.app, capsys, "decode", "url", "a%20b")[1] == "a b\n"
    assert invoke(data.app, capsys, "hash", "md5", "abc")[1] == "900150983cd24fb0d6963f7d28e17f72\n"
    code, _, err = invoke(data.app, capsys, "encode", "rot13", "x")
    assert code == EXIT_FAILURE
    assert 'unknown encoding format "rot13"' in err


def test_format_command(capsys):
    assert invoke(data.app, capsys, "format", "currency", "1234.567")[1] == "$1,234.57\n"
    assert invoke(data.app, capsys, "format", "number", "2.5", "0")[1] == "3\n"
    assert invoke(data.app, capsys, "format", "bytes", "1536")[1] == "1.5 KB\n"
    assert (
        invoke(data.app, capsys, "format", "date", "2024-03-05T06:07:08Z", "YYYY-MM-DD HH:mm:ss")[1]
        == "2024-03-05 06:07:08\n"
    )
    code, _, err = invoke(data.app, capsys, "format", "weird", "1")
    assert code == EXIT_FAILURE
    assert 'unknown format type "weird"' in err


def test_format_number_uses_configured_default(capsys, monkeypatch):
    monkeypatch.setenv("TOOLBELT_DEFAULT_DECIMALS", "3")
    assert invoke(data.app, capsys, "format", "number", "1")[1] == "1.000\n"


# --- file ---


def test_write_read_and_size(capsys, tmp_path):
    code, out, _ = invoke(files.app, capsys, "write", "notes/a.txt", "hello")
    assert code == EXIT_OK
    assert "Wrote file: notes/a.txt" in out

    assert invoke(files.app, capsys, "read", "notes/a.txt")[1] == "hello\n"
    assert "File size: notes/a.txt - 5 Bytes" in invoke(files.app, capsys, "size", "notes/a.txt")[1]


def test_move_missing_source(capsys, tmp_path):
    code, out, err = invoke(files.app, capsys, "move", "missing.txt", "dest.txt")
    assert code == EXIT_FAILURE
    assert "does not exist" in err
    assert not (tmp_path / "dest.txt").exists()


def test_exists_and_list(capsys, tmp_path):
    (tmp_path / "box").mkdir()
    assert "Directory is empty: box" in invoke(files.app, capsys, "list", "box")[1]
    (tmp_path / "box" / "item.txt").write_text("x", encoding="utf-8")

    code, out, _ = invoke(files.app, capsys, "list", "box")
    assert code == EXIT_OK
    assert "[FILE]" in out
    assert "item.txt" in out

    assert "File exists: box" in invoke(files.app, capsys, "exists", "box")[1]
    assert "File does not exist: nope" in invoke(files.app, capsys, "exists", "nope")[1]


# --- network ---


def test_get_prints_body(capsys, mock_server):
    mock_server(lambda request: httpx.Response(200, json={"users": ["Alice"]}))
    code, out, _ = invoke(network.app, capsys, "get", "http://test/api/users")
    assert code == EXIT_OK
    assert json.loads(out) == {"users": ["Alice"]}


def test_get_failure_with_output_writes_nothing(capsys, mock_server, tmp_path):
    mock_server(lambda request: httpx.Response(404, json={"error": "Not Found"}))
    code, out, err = invoke(network.app, capsys, "get", "http://test/missing", "--output", "out.json")
    assert code == EXIT_FAILURE
    assert "request failed: 404 Not Found" in err
    assert '"error": "Not Found"' in err
    assert not (tmp_path / "out.json").exists()


def test_post_saves_output_and_sends_headers(capsys, mock_server, tmp_path):
    seen = mock_server(lambda request: httpx.Response(200, json={"ok": True}))
    code, out, _ = invoke(
        network.app,
        capsys,
        "post",
        "http://test/api/users",
        '{"name": "Dana"}',
        "--headers",
        '{"Content-Type": "application/json"}',
        "--output",
        "saved.json",
    )
    assert code == EXIT_OK
    assert "Response saved to: saved.json" in out
    assert json.loads((tmp_path / "saved.json").read_text(encoding="utf-8")) == {"ok": True}
    assert seen[0].headers["content-type"] == "application/json"
    assert seen[0].content == b'{"name": "Dana"}'


def test_invalid_headers_fail(capsys):
    code, _, err = invoke(network.app, capsys, "get", "http://test/", "--headers", "{nope")
    assert code == EXIT_FAILURE
    assert "invalid JSON headers" in err


def test_verbose_echoes_request_and_response(capsys, mock_server):
    mock_server(lambda request: httpx.Response(200, text="ok"))
    code, out, _ = invoke(network.app, capsys, "delete", "http://test/x", "--verbose")
    assert code == EXIT_OK
    assert "Sending DELETE request to: http://test/x" in out
    assert "Response status: 200 OK" in out


def test_status_command(capsys, mock_server):
    mock_server(lambda request: httpx.Response(200, headers={"content-type": "text/plain"}))
    code, out, _ = invoke(network.app, capsys, "status", "http://test/")
    assert code == EXIT_OK
    assert "Status: 200 OK" in out
    assert "Content-Type: text/plain" in out


def test_download_command(capsys, mock_server, tmp_path):
    mock_server(lambda request: httpx.Response(200, content=b"abcd"))
    code, out, _ = invoke(network.app, capsys, "download", "http://test/f", "f.bin")
    assert code == EXIT_OK
    assert "Downloaded 4 bytes to: f.bin" in out
    assert (tmp_path / "f.bin").read_bytes() == b"abcd"


# --- usage errors and dash-prefixed values ---


def test_usage_errors_exit_one(capsys):
    code, _, err = invoke(data.app, capsys, "--bogus")
    assert code == EXIT_FAILURE
    assert "--bogus" in err

    code, _, err = invoke(serve.app, capsys, "threaded", "--port", "99999")
    assert code == EXIT_FAILURE
    assert "Error:" in err

    code, _, err = invoke(data.app, capsys, "text", "trim", "a", "b")
    assert code == EXIT_FAILURE
    assert "unexpected extra argument" in err


def test_negative_numbers_are_values(capsys):
    assert invoke(data.app, capsys, "format", "currency", "-5")[1] == "-$5.00\n"
    assert invoke(data.app, capsys, "format", "number", "-2.5", "0")[1] == "-3\n"

    code, _, err = invoke(data.app, capsys, "format", "bytes", "-1")
    assert code == EXIT_FAILURE
    assert "must not be negative" in err


def test_dash_prefixed_text_is_a_value(capsys):
    assert invoke(data.app, capsys, "text", "uppercase", "-abc")[1] == "-ABC\n"
    assert invoke(data.app, capsys, "encode", "base64", "-x")[1] == "LXg=\n"
    assert invoke(main.app, capsys, "data", "text", "reverse", "--flag")[1] == "galf--\n"


def test_non_utf8_file_read_fails_cleanly(capsys, tmp_path):
    (tmp_path / "blob.bin").write_bytes(b"\xff\xfe\x00")
    code, out, err = invoke(files.app, capsys, "read", "blob.bin")
    assert code == EXIT_FAILURE
    assert out == ""
    assert "not valid UTF-8" in err


def test_huge_byte_count_formats(capsys):
    code, out, _ = invoke(data.app, capsys, "format", "bytes", "1" + "0" * 400)
    assert code == EXIT_OK
    assert out.endswith(" TB\n")
