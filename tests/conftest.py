"""
Pytest configuration and shared fixtures for PyADPwdLastSet tests.
"""

import pytest

from pyadpwdlastset import BulkLookupError, RawAccountRecord


class FakeDirectoryClient:
    """In-memory stand-in for LdapDirectoryClient."""

    def __init__(self, accounts=None, bulk=None, bulk_error=None, failing=(), connects=True):
        self.accounts = dict(accounts or {})
        self.bulk = list(bulk or [])
        self.bulk_error = bulk_error
        self.failing = set(failing)
        self.connects = connects
        self.base_dn = "DC=example,DC=local"
        self.calls = []
        self.closed = False

    def connect(self):
        self.calls.append(("connect",))
        return self.connects

    def lookup_all(self, scope_base=None):
        self.calls.append(("lookup_all", scope_base))
        if self.bulk_error:
            raise BulkLookupError(self.bulk_error)
        return list(self.bulk)

    def lookup_one(self, identifier):
        self.calls.append(("lookup_one", identifier))
        if identifier in self.failing or identifier not in self.accounts:
            return None, False
        return RawAccountRecord(identifier, self.accounts[identifier]), True

    def close(self):
        self.closed = True


class CannedAnswers:
    """Confirmation provider returning a fixed sequence of decisions."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.asked = []

    def __call__(self, path):
        self.asked.append(path)
        return self.answers.pop(0)


@pytest.fixture
def fake_client():
    return FakeDirectoryClient


@pytest.fixture
def answers():
    return CannedAnswers


@pytest.fixture
def list_file(tmp_path):
    """Write an account list and return its path."""
    def _write(*lines, name="users.txt"):
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return str(path)
    return _write
