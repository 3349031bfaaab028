from unittest import mock

import requests
from click.testing import CliRunner

from pwnedcheck import __version__, breach
from pwnedcheck.cli import EXIT_ERROR, EXIT_FOUND, EXIT_NOT_FOUND, cli
from tests.fakes import fake_response

PASSWORD_SUFFIX = "1E4C9B93F3F0682250B6CF8331B7EE68FD8"


def invoke(args, text="", **kwargs):
    with mock.patch.object(breach.requests, "get", return_value=fake_response(text), **kwargs) as get:
        result = CliRunner().invoke(cli, args)
    return result, get


def test_check_found_exits_one():
    result, get = invoke(["check", "password"], text=f"{PASSWORD_SUFFIX}:3730471\r\n")

    assert result.exit_code == EXIT_FOUND
    assert "3,730,471" in result.output
    assert get.call_args[0][0].endswith("/range/5BAA6")


def test_check_not_found_exits_zero():
    result, _ = invoke(["check", "password"], text="003D68EB55068C33ACE09247EE4C639306B:3\r\n")

    assert result.exit_code == EXIT_NOT_FOUND
    assert "Not found" in result.output


def test_check_prompts_when_password_missing():
    with mock.patch("pwnedcheck.cli.getpass.getpass", return_value="password") as prompt:
        result, _ = invoke(["check"], text=f"{PASSWORD_SUFFIX}:1\r\n")

    prompt.assert_called_once()
    assert result.exit_code == EXIT_FOUND


def test_check_passes_timeout():
    _, get = invoke(["check", "password", "--timeout", "3"])
    assert get.call_args[1]["timeout"] == 3.0


def test_check_transport_error_exits_two():
    result, _ = invoke(["check", "password"],
                       side_effect=requests.exceptions.ConnectionError("no route"))

    assert result.exit_code == EXIT_ERROR
    assert "Breach check failed" in result.output


def test_check_protocol_error_exits_two():
    result, _ = invoke(["check", "password"], text="not a range body")
    assert result.exit_code == EXIT_ERROR


def test_fingerprint_shows_prefix_only():
    result = CliRunner().invoke(cli, ["fingerprint", "password"])

    assert result.exit_code == 0
    assert "5BAA6" in result.output
    assert PASSWORD_SUFFIX not in result.output


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert __version__ in result.output


def test_check_rejects_non_positive_timeout():
    for value in ("0", "-1"):
        result, get = invoke(["check", "password", "--timeout", value])

        assert result.exit_code == EXIT_ERROR
        assert "--timeout" in result.output
        get.assert_not_called()
