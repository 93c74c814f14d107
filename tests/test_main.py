import json

from click.testing import CliRunner

from coreason_interval.main import cli

DAY = "%Y-%m-%d"


def test_relate_meets_with_tolerance() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli, ["relate", "2014-05-03", "2014-05-04", "2014-05-05", "2014-05-06", "--tolerance", "24h", "-p", DAY]
    )

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["state"] == "MEETS"
    assert data["error"] is None


def test_relate_default_tolerance() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["relate", "2014-05-03", "2014-05-04", "2014-05-05", "2014-05-06", "-p", DAY])

    assert result.exit_code == 0
    assert json.loads(result.output)["state"] == "PRECEDES"


def test_relate_overlaps() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["relate", "2014-05-01", "2014-05-18", "2014-05-14", "2014-05-30", "-p", DAY])

    assert result.exit_code == 0
    assert json.loads(result.output)["state"] == "OVERLAPS"


def test_relate_negative_tolerance() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli, ["relate", "2014-05-01", "2014-05-18", "2014-05-14", "2014-05-30", "-p", DAY, "--tolerance=-4d"]
    )

    assert result.exit_code == 0
    assert json.loads(result.output)["state"] == "MEETS"


def test_relate_free_form_dates() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["relate", "2024-01-01 10:00", "2024-01-01 12:00", "2024-01-01 11:00+00:00", "2024-01-01 12:00+00:00"],
    )

    assert result.exit_code == 0
    assert json.loads(result.output)["state"] == "FINISHED_BY"


def test_relate_invalid_date() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["relate", "BadDate", "2014-05-04", "2014-05-05", "2014-05-06", "-p", DAY])

    assert result.exit_code == 1
    assert "Error: Could not parse 'BadDate'" in result.output


def test_relate_invalid_tolerance() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli, ["relate", "2014-05-03", "2014-05-04", "2014-05-05", "2014-05-06", "-p", DAY, "-t", "soon"]
    )

    assert result.exit_code == 1
    assert "Error: Could not parse 'soon'" in result.output


def test_relate_tolerance_out_of_range() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli, ["relate", "2014-05-03", "2014-05-04", "2014-05-05", "2014-05-06", "-p", DAY, "-t", "9999999999d"]
    )

    assert result.exit_code == 1
    assert "Error: Could not parse '9999999999d'" in result.output


def test_check_holds() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli, ["check", "FINISHED_BY", "2014-05-14", "2014-05-30", "2014-05-15", "2014-05-30", "-p", DAY]
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {"relation": "FINISHED_BY", "holds": True}


def test_check_does_not_hold() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["check", "STARTS", "2014-05-14", "2014-05-30", "2014-05-15", "2014-05-30", "-p", DAY])

    assert result.exit_code == 0
    assert json.loads(result.output)["holds"] is False


def test_check_unknown_relation() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["check", "UNKNOWN", "2014-05-14", "2014-05-30", "2014-05-15", "2014-05-30"])

    assert result.exit_code == 2


def test_show() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["show", "2014-05-03", "2014-05-04", "-p", DAY, "-f", "%Y-%m-%d %H:%M"])

    assert result.exit_code == 0
    formatted, summary = result.output.split("\n", 1)
    assert formatted == "[2014-05-03 00:00, 2014-05-04 00:00]"
    data = json.loads(summary)
    assert data["reversed"] is False


def test_show_display_tz() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli, ["show", "2014-05-03", "2014-05-04", "-p", DAY, "-f", "%H:%M", "--display-tz", "Asia/Tokyo"]
    )

    assert result.exit_code == 0
    assert result.output.startswith("[09:00, 09:00]")


def test_show_reversed() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["show", "2014-05-04", "2014-05-03", "-p", DAY])

    assert result.exit_code == 0
    data = json.loads(result.output.split("\n", 1)[1])
    assert data["reversed"] is True


def test_show_unknown_timezone() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["show", "2014-05-03", "2014-05-04", "-p", DAY, "-z", "Nowhere/Atlantis"])

    assert result.exit_code == 1
    assert "Error: Unknown timezone 'Nowhere/Atlantis'" in result.output


def test_show_invalid_date() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["show", "2014-05-03", "not a date", "-p", DAY])

    assert result.exit_code == 1
    assert "Error: Could not parse" in result.output
