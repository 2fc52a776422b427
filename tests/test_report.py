# End-to-end tests for PwdLastSetReport with a fake directory

import csv
import logging

import pytest

from pyadpwdlastset import (
    NormalizedRecord,
    PwdLastSetConfig,
    PwdLastSetReport,
    RawAccountRecord,
)


def _config(output, **kwargs):
    return PwdLastSetConfig(domain_controller="dc01.example.local", output_file=str(output), **kwargs)


def _rows(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def _never(path):
    raise AssertionError("confirmation should not be requested")


class TestScenarios:
    """Full runs through guard, collection, normalization and writing"""

    def test_named_list_with_missing_account(self, tmp_path, fake_client, list_file):
        output = tmp_path / "report.csv"
        client = fake_client(accounts={"alice": 132000000000000000})
        report = PwdLastSetReport(_config(output, user_list=list_file("alice", "bob")), client, _never)

        assert report.run() is True
        assert _rows(output) == [
            ["Name", "PwdLastSet"],
            ["alice", "4/17/2019 6:40:00 PM"],
            ["USER NOT FOUND - bob", "0"],
        ]

    def test_all_accounts_with_unset_password(self, tmp_path, fake_client):
        output = tmp_path / "report.csv"
        client = fake_client(bulk=[
            RawAccountRecord("alice", 132000000000000000),
            RawAccountRecord("svc_backup", 0),
            RawAccountRecord("carol", 133258368164214300),
        ])
        report = PwdLastSetReport(_config(output), client, _never)

        assert report.run() is True
        rows = _rows(output)[1:]
        assert [r[0] for r in rows] == ["alice", "svc_backup", "carol"]
        assert rows[1][1] == "0"
        assert rows[0][1] != "0" and rows[2][1] != "0"
        assert client.calls[-1] == ("lookup_all", None)

    def test_declined_overwrite_stops_before_lookups(self, tmp_path, fake_client, answers, caplog):
        output = tmp_path / "report.csv"
        output.write_text("Name,PwdLastSet\nold,0\n")
        client = fake_client(bulk=[RawAccountRecord("alice", 1)])
        report = PwdLastSetReport(_config(output), client, answers(False))

        with caplog.at_level(logging.WARNING, logger="PyADPwdLastSet"):
            assert report.run() is False
        assert client.calls == []
        assert output.read_text() == "Name,PwdLastSet\nold,0\n"
        assert "declined" in caplog.text

    def test_accepted_overwrite_replaces_content(self, tmp_path, fake_client, answers):
        output = tmp_path / "report.csv"
        output.write_text("Name,PwdLastSet\nold,0\n")
        client = fake_client(bulk=[RawAccountRecord("alice", 0)])

        assert PwdLastSetReport(_config(output), client, answers(True)).run() is True
        assert _rows(output) == [["Name", "PwdLastSet"], ["alice", "0"]]

    def test_repeated_runs_identical(self, tmp_path, fake_client, answers):
        output = tmp_path / "report.csv"
        client = fake_client(bulk=[RawAccountRecord("alice", 132000000000000000), RawAccountRecord("bob", 0)])
        PwdLastSetReport(_config(output), client, _never).run()
        first = output.read_bytes()
        PwdLastSetReport(_config(output), client, answers(True)).run()
        assert output.read_bytes() == first

    def test_append_mode(self, tmp_path, fake_client):
        output = tmp_path / "report.csv"
        output.write_text("Name,PwdLastSet\r\nold,0\r\n")
        client = fake_client(bulk=[RawAccountRecord("alice", 0)])

        assert PwdLastSetReport(_config(output, append=True), client, _never).run() is True
        assert _rows(output) == [["Name", "PwdLastSet"], ["old", "0"], ["alice", "0"]]

    def test_scoped_subtree(self, tmp_path, fake_client):
        output = tmp_path / "report.csv"
        client = fake_client(bulk=[RawAccountRecord("alice", 0)])
        report = PwdLastSetReport(_config(output, search_base="OU=Staff,DC=example,DC=local"), client, _never)
        assert report.run() is True
        assert ("lookup_all", "OU=Staff,DC=example,DC=local") in client.calls

    def test_records_kept_on_report(self, tmp_path, fake_client):
        client = fake_client(bulk=[RawAccountRecord("alice", 0)])
        report = PwdLastSetReport(_config(tmp_path / "report.csv"), client, _never)
        report.run()
        assert report.records == [NormalizedRecord("alice", "0")]


class TestFailures:
    """Runs that stop early"""

    def test_empty_output_path(self, fake_client):
        client = fake_client()
        report = PwdLastSetReport(_config(""), client, _never)
        assert report.run() is False
        assert client.calls == []

    def test_connection_failure(self, tmp_path, fake_client, caplog):
        client = fake_client(connects=False)
        with caplog.at_level(logging.ERROR, logger="PyADPwdLastSet"):
            assert PwdLastSetReport(_config(tmp_path / "report.csv"), client, _never).run() is False
        assert "Failed to connect" in caplog.text

    def test_bulk_failure_leaves_empty_file(self, tmp_path, fake_client, caplog):
        output = tmp_path / "report.csv"
        client = fake_client(bulk_error="server unreachable")
        with caplog.at_level(logging.ERROR, logger="PyADPwdLastSet"):
            assert PwdLastSetReport(_config(output), client, _never).run() is False
        assert output.read_bytes() == b""
        assert "server unreachable" in caplog.text

    def test_empty_bulk_result(self, tmp_path, fake_client, caplog):
        output = tmp_path / "report.csv"
        with caplog.at_level(logging.ERROR, logger="PyADPwdLastSet"):
            assert PwdLastSetReport(_config(output), fake_client(), _never).run() is False
        assert output.read_bytes() == b""
        assert "No accounts returned" in caplog.text

    def test_empty_list_file(self, tmp_path, fake_client, list_file):
        output = tmp_path / "report.csv"
        client = fake_client()
        report = PwdLastSetReport(_config(output, user_list=list_file()), client, _never)
        assert report.run() is False
        assert output.read_bytes() == b""
        assert not any(call[0] == "lookup_one" for call in client.calls)

    def test_unreadable_list_file(self, tmp_path, fake_client, caplog):
        output = tmp_path / "report.csv"
        config = _config(output, user_list=str(tmp_path / "missing.txt"))
        with caplog.at_level(logging.ERROR, logger="PyADPwdLastSet"):
            assert PwdLastSetReport(config, fake_client(), _never).run() is False
        assert "Could not read account list" in caplog.text


class TestXlsxOutput:
    """The optional Excel copy of the report"""

    def test_xlsx_written(self, tmp_path, fake_client):
        pytest.importorskip("openpyxl")
        xlsx = tmp_path / "report.xlsx"
        client = fake_client(bulk=[RawAccountRecord("alice", 0)])
        config = _config(tmp_path / "report.csv", xlsx_file=str(xlsx))
        assert PwdLastSetReport(config, client, _never).run() is True
        assert xlsx.exists()

    def test_control_character_in_list_name(self, tmp_path, fake_client, list_file):
        pytest.importorskip("openpyxl")
        output = tmp_path / "report.csv"
        xlsx = tmp_path / "report.xlsx"
        config = _config(output, user_list=list_file("bad\x01name"), xlsx_file=str(xlsx))

        assert PwdLastSetReport(config, fake_client(), _never).run() is True
        assert _rows(output)[1] == ["USER NOT FOUND - bad\x01name", "0"]
        assert xlsx.exists()
