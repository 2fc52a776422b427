#!/usr/bin/env python3
"""
PyADPwdLastSet - Active Directory password change report
Queries pwdLastSet for every user, a subtree, or a list of accounts and
writes the results to a CSV report.

License: MIT
"""

import argparse
import csv
import os
import sys
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple, Union
from dataclasses import dataclass
import logging

# Third-party imports
from ldap3 import Server, Connection, ALL, NTLM, KERBEROS, SASL, SUBTREE
from ldap3.core.exceptions import LDAPException, LDAPBindError
from ldap3.utils.conv import escape_filter_chars

try:
    import openpyxl
    from openpyxl.styles import Font, PatternFill, Alignment
    from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
    from openpyxl.utils import get_column_letter
    from openpyxl.utils.exceptions import IllegalCharacterError
    OPENPYXL_AVAILABLE = True
except ImportError:
    OPENPYXL_AVAILABLE = False


# Constants
VERSION = "v0.1.0"
BANNER = f"""
╔═════════════════════════════════════════════════════════
║  PyADPwdLastSet {VERSION} - AD Password Change Report
║  -------------------------------------------------------
║  pwdLastSet for all users, a subtree or an account list
╚═════════════════════════════════════════════════════════
"""

REPORT_FIELDS = ['Name', 'PwdLastSet']
NOT_FOUND_PREFIX = "USER NOT FOUND - "
UNSET_TIMESTAMP = "0"

USER_FILTER = "(&(objectCategory=person)(objectClass=user))"
ENABLED_USER_FILTER = "(&(objectCategory=person)(objectClass=user)(!(userAccountControl:1.2.840.113556.1.4.803:=2)))"
USER_ATTRIBUTES = ['name', 'sAMAccountName', 'pwdLastSet']

# Windows FILETIME is 100-nanosecond intervals since January 1, 1601 UTC
FILETIME_EPOCH = datetime(1601, 1, 1, tzinfo=timezone.utc)
MAX_DATETIME = datetime.max.replace(tzinfo=timezone.utc)
MAX_FILETIME = (MAX_DATETIME - FILETIME_EPOCH) // timedelta(microseconds=1) * 10

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format='[%(levelname)s] %(message)s'
)
logger = logging.getLogger('PyADPwdLastSet')


class PwdReportError(Exception):
    """Base class for errors that stop a report run."""


class ConfigurationError(PwdReportError):
    """Missing or invalid run configuration."""


class OverwriteDeclined(PwdReportError):
    """The operator refused to overwrite an existing report."""


class FileAccessError(PwdReportError):
    """The report or the account list file could not be accessed."""


class DirectoryConnectionError(PwdReportError):
    """Binding to the domain controller failed."""


class BulkLookupError(PwdReportError):
    """A bulk account query failed as a whole."""


class EmptySourceError(PwdReportError):
    """There is nothing to report on."""


def _extract_ldap_value(attr):
    """Extract primitive value from ldap3 Attribute object."""
    if hasattr(attr, 'raw_values'):
        return attr.value
    return attr


def safe_int(val, default=0):
    """Safely convert a value to int, handling ldap3 Attribute objects."""
    if val is None:
        return default
    if hasattr(val, 'raw_values'):
        val = val.value
    if val is None:
        return default
    try:
        return int(val)
    except (ValueError, TypeError):
        return default


def get_attr(entry, attr_name: str, default=None):
    """Safely get attribute value from LDAP entry."""
    try:
        if hasattr(entry, attr_name):
            attr = getattr(entry, attr_name)
            if attr is not None:
                val = _extract_ldap_value(attr)
                if val is not None:
                    if isinstance(val, list):
                        return val[0] if len(val) == 1 else val
                    return val
    except (IndexError, KeyError, AttributeError):
        pass
    return default


def get_raw_filetime(entry, attr_name: str) -> int:
    """
    Get a FILETIME attribute as the integer stored in the directory.

    ldap3 formats pwdLastSet into a datetime when schema info is loaded, so
    the raw value is preferred. A formatted datetime is converted back.
    """
    try:
        if not hasattr(entry, attr_name):
            return 0
        attr = getattr(entry, attr_name)
    except (IndexError, KeyError, AttributeError):
        return 0
    raw = attr.raw_values if hasattr(attr, 'raw_values') else attr
    if isinstance(raw, list):
        raw = raw[0] if raw else None
    if isinstance(raw, datetime):
        return datetime_to_filetime(raw)
    return safe_int(raw, 0)


def dn_to_fqdn(dn: str) -> str:
    """Convert Distinguished Name to FQDN."""
    if not dn:
        return ""
    parts = []
    for part in dn.split(','):
        if part.strip().upper().startswith('DC='):
            parts.append(part.strip()[3:])
    return '.'.join(parts)


def datetime_to_filetime(dt: datetime) -> int:
    """Convert a datetime (naive values are taken as UTC) to Windows FILETIME."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    ticks = (dt - FILETIME_EPOCH) // timedelta(microseconds=1) * 10
    return max(ticks, 0)


def filetime_to_datetime(filetime: int) -> Optional[datetime]:
    """Convert Windows FILETIME to an aware UTC datetime, None when unset."""
    if filetime is None or filetime <= 0:
        return None
    if filetime >= MAX_FILETIME:
        return MAX_DATETIME
    return FILETIME_EPOCH + timedelta(microseconds=filetime // 10)


def format_datetime(dt) -> str:
    """Format datetime to match ADRecon output format (M/D/YYYY H:MM:SS AM/PM)."""
    if not isinstance(dt, datetime):
        return ""
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt.month}/{dt.day}/{dt.year} {hour}:{dt.minute:02d}:{dt.second:02d} {meridiem}"


def normalize_pwd_last_set(raw) -> str:
    """
    Render a raw pwdLastSet value for the report as a UTC date and time.

    Non-positive values mean the password was never set (or must be changed
    at next logon) and are written as "0".
    """
    filetime = safe_int(raw, 0)
    if filetime <= 0:
        return UNSET_TIMESTAMP
    return format_datetime(filetime_to_datetime(filetime))


@dataclass(frozen=True)
class RawAccountRecord:
    """An account name with its pwdLastSet value as stored in the directory."""
    identifier: str
    pwd_last_set: int = 0


@dataclass(frozen=True)
class NormalizedRecord:
    """A report row."""
    name: str
    last_changed: str

    def to_row(self) -> Dict[str, str]:
        return {'Name': self.name, 'PwdLastSet': self.last_changed}


@dataclass(frozen=True)
class Found:
    """Lookup outcome for an account that exists."""
    record: RawAccountRecord

    def to_record(self) -> RawAccountRecord:
        return self.record


@dataclass(frozen=True)
class NotFound:
    """Lookup outcome for an account that could not be resolved."""
    identifier: str

    def to_record(self) -> RawAccountRecord:
        return RawAccountRecord(NOT_FOUND_PREFIX + self.identifier, 0)


LookupOutcome = Union[Found, NotFound]


@dataclass(frozen=True)
class AllAccounts:
    """Every user account in the domain."""


@dataclass(frozen=True)
class ScopedSubtree:
    """Every user account below a distinguished name."""
    base: str


@dataclass(frozen=True)
class NamedList:
    """Accounts named one per line in a text file."""
    path: str


CollectionMode = Union[AllAccounts, ScopedSubtree, NamedList]


def select_mode(search_base: str = "", user_list: str = "") -> CollectionMode:
    """Pick the collection mode: an account list wins over a search base."""
    if user_list:
        return NamedList(user_list)
    if search_base:
        return ScopedSubtree(search_base)
    return AllAccounts()


@dataclass
class PwdLastSetConfig:
    """Configuration for a report run."""
    domain_controller: str
    domain: str = ""
    username: str = ""
    password: str = ""
    auth_method: str = "ntlm"  # ntlm, kerberos
    use_ssl: bool = False
    port: int = 389
    page_size: int = 500
    output_file: str = ""
    append: bool = False
    search_base: str = ""
    user_list: str = ""
    only_enabled: bool = False
    xlsx_file: str = ""


class LdapDirectoryClient:
    """pwdLastSet lookups against a domain controller over LDAP."""

    def __init__(self, config: PwdLastSetConfig):
        self.config = config
        self.conn: Optional[Connection] = None
        self.base_dn: str = ""

    def _bind_arguments(self) -> Dict:
        """Connection keyword arguments for the configured auth method."""
        if self.config.auth_method.lower() == 'kerberos':
            return {'user': self.config.username, 'authentication': SASL, 'sasl_mechanism': KERBEROS}

        # NTLM needs DOMAIN\user unless a UPN or down-level name was given
        user = self.config.username
        if self.config.domain and '\\' not in user and '@' not in user:
            user = f"{self.config.domain}\\{user}"
        return {'user': user, 'authentication': NTLM}

    def connect(self) -> bool:
        """Bind to the domain controller and find the default naming context."""
        server = Server(
            self.config.domain_controller,
            port=636 if self.config.use_ssl else self.config.port,
            use_ssl=self.config.use_ssl,
            get_info=ALL
        )
        bind_args = self._bind_arguments()
        logger.info(f"Binding to {self.config.domain_controller} as {bind_args['user']} "
                    f"({self.config.auth_method.upper()})...")

        try:
            self.conn = Connection(server, password=self.config.password, auto_bind=True, **bind_args)
        except LDAPBindError as e:
            logger.error(f"LDAP bind error: {e}")
            return False
        except LDAPException as e:
            logger.error(f"LDAP error: {e}")
            return False

        if not self.conn.bound:
            logger.error(f"LDAP bind failed: {self.conn.result}")
            return False

        logger.info("LDAP bind successful")
        self._get_root_dse()
        return True

    def _get_root_dse(self):
        """Get the default naming context from the root DSE."""
        if self.conn.server.info:
            info = self.conn.server.info
            if info.naming_contexts:
                self.base_dn = str(info.naming_contexts[0])
            if hasattr(info, 'other') and 'defaultNamingContext' in info.other:
                self.base_dn = str(info.other['defaultNamingContext'][0])

        logger.info(f"Base DN: {self.base_dn}")

    def _check_result(self, accepted=(0,)):
        result = self.conn.result or {}
        code = result.get('result', 0)
        if code not in accepted:
            raise LDAPException(f"{result.get('description', 'error')} ({code}): {result.get('message', '')}")

    def search(self, search_base: str, search_filter: str, attributes: List[str] = None,
               search_scope=SUBTREE) -> List:
        """Perform paged LDAP search. Failures propagate as LDAPException."""
        if attributes is None:
            attributes = ['*']

        entries = []
        self.conn.search(
            search_base=search_base,
            search_filter=search_filter,
            search_scope=search_scope,
            attributes=attributes,
            paged_size=self.config.page_size,
            paged_cookie=None
        )
        self._check_result()
        entries.extend(self.conn.entries)

        # Handle paging
        while self.conn.result.get('controls', {}).get('1.2.840.113556.1.4.319', {}).get('value', {}).get('cookie'):
            cookie = self.conn.result['controls']['1.2.840.113556.1.4.319']['value']['cookie']
            self.conn.search(
                search_base=search_base,
                search_filter=search_filter,
                search_scope=search_scope,
                attributes=attributes,
                paged_size=self.config.page_size,
                paged_cookie=cookie
            )
            self._check_result()
            entries.extend(self.conn.entries)

        return entries

    def _to_record(self, entry, identifier: str = "") -> RawAccountRecord:
        name = identifier or get_attr(entry, 'name', '') or get_attr(entry, 'sAMAccountName', '')
        return RawAccountRecord(str(name), get_raw_filetime(entry, 'pwdLastSet'))

    def lookup_all(self, scope_base: Optional[str] = None) -> List[RawAccountRecord]:
        """Return every user below scope_base (the domain when empty)."""
        search_base = scope_base or self.base_dn
        filter_str = ENABLED_USER_FILTER if self.config.only_enabled else USER_FILTER
        try:
            entries = self.search(search_base, filter_str, USER_ATTRIBUTES)
        except LDAPException as e:
            raise BulkLookupError(f"Account query under '{search_base}' failed: {e}") from e
        return [self._to_record(entry) for entry in entries]

    def lookup_one(self, identifier: str) -> Tuple[Optional[RawAccountRecord], bool]:
        """Look up one account by sAMAccountName, UPN or display name. Never raises."""
        escaped = escape_filter_chars(identifier)
        filter_str = (f"(&{USER_FILTER}(|(sAMAccountName={escaped})"
                      f"(userPrincipalName={escaped})(displayName={escaped})))")
        try:
            self.conn.search(
                search_base=self.base_dn,
                search_filter=filter_str,
                search_scope=SUBTREE,
                attributes=USER_ATTRIBUTES,
                size_limit=1
            )
            # sizeLimitExceeded (4) still returns the first match
            self._check_result(accepted=(0, 4))
        except LDAPException as e:
            logger.warning(f"    Lookup of '{identifier}' failed: {e}")
            return None, False

        if not self.conn.entries:
            return None, False
        return self._to_record(self.conn.entries[0], identifier), True

    def close(self):
        """Close LDAP connection."""
        if self.conn:
            self.conn.unbind()


def prompt_overwrite(path: str, input_func: Callable[[str], str] = input) -> bool:
    """Ask whether an existing report may be overwritten. Loops until yes/y/no/n."""
    while True:
        try:
            answer = input_func(f"[?] Output file '{path}' already exists. Overwrite? (yes/no): ")
        except EOFError:
            return False
        answer = answer.strip().lower()
        if answer in ('yes', 'y'):
            return True
        if answer in ('no', 'n'):
            return False
        print("[!] Please answer yes, y, no or n")


def _create_empty(path: str):
    try:
        with open(path, 'w', newline='', encoding='utf-8'):
            pass
    except OSError as e:
        raise FileAccessError(f"Could not create output file '{path}': {e}") from e


def prepare_report_file(path: str, allow_append: bool = False,
                        confirm: Callable[[str], bool] = prompt_overwrite):
    """
    Make sure the report file can be written before anything is queried.

    A new file is created empty. An existing file is either truncated after
    the operator confirms, or, in append mode, opened once to check that it
    is writable.
    """
    if not path:
        raise ConfigurationError("No output file given")

    if not os.path.exists(path):
        _create_empty(path)
        logger.debug(f"Created output file {path}")
        return

    if allow_append:
        try:
            with open(path, 'a', newline='', encoding='utf-8'):
                pass
        except OSError as e:
            raise FileAccessError(f"Could not open '{path}' for appending: {e}") from e
        logger.info(f"[*] Appending to existing file {path}")
        return

    if not confirm(path):
        raise OverwriteDeclined(f"Not overwriting existing file '{path}' (declined by user)")
    _create_empty(path)
    logger.info(f"[*] Overwriting existing file {path}")


def read_account_list(path: str) -> List[str]:
    """Read account names, one per line. Blank lines are skipped."""
    try:
        with open(path, encoding='utf-8-sig') as f:
            identifiers = [line.strip() for line in f]
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(f"Could not read account list '{path}': {e}") from e

    identifiers = [name for name in identifiers if name]
    if not identifiers:
        raise EmptySourceError(f"Account list '{path}' contains no account names")
    return identifiers


def lookup_named_accounts(client, identifiers: List[str]) -> List[LookupOutcome]:
    """Look up each account in order. Misses become NotFound outcomes."""
    outcomes = []
    for identifier in identifiers:
        record, found = client.lookup_one(identifier)
        if found and record is not None:
            outcomes.append(Found(RawAccountRecord(identifier, record.pwd_last_set)))
        else:
            logger.warning(f"    User not found: {identifier}")
            outcomes.append(NotFound(identifier))
    return outcomes


def collect_accounts(client, mode: CollectionMode) -> List[RawAccountRecord]:
    """Collect raw pwdLastSet records using one of the three modes."""
    if isinstance(mode, NamedList):
        identifiers = read_account_list(mode.path)
        logger.info(f"[-] Looking up {len(identifiers)} accounts from {mode.path}...")
        outcomes = lookup_named_accounts(client, identifiers)
        missing = sum(1 for outcome in outcomes if isinstance(outcome, NotFound))
        if missing:
            logger.info(f"    {missing} of {len(outcomes)} accounts not found")
        return [outcome.to_record() for outcome in outcomes]

    if isinstance(mode, ScopedSubtree):
        logger.info(f"[-] Collecting Users under {mode.base}...")
        records = client.lookup_all(mode.base)
    else:
        logger.info("[-] Collecting Users - May take some time...")
        records = client.lookup_all(None)
    logger.info(f"    Found {len(records)} users")
    return records


def normalize_records(records: List[RawAccountRecord]) -> List[NormalizedRecord]:
    return [NormalizedRecord(r.identifier, normalize_pwd_last_set(r.pwd_last_set)) for r in records]


def _ends_with_newline(path: str) -> bool:
    with open(path, 'rb') as f:
        f.seek(-1, os.SEEK_END)
        return f.read(1) in (b'\n', b'\r')


def write_report(path: str, records: List[NormalizedRecord], append: bool = False) -> int:
    """Write records as CSV with a Name,PwdLastSet header. Returns rows written."""
    try:
        write_header = not append or not os.path.exists(path) or os.path.getsize(path) == 0
        terminate_last_line = append and not write_header and not _ends_with_newline(path)
        with open(path, 'a' if append else 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=REPORT_FIELDS)
            if terminate_last_line:
                f.write(writer.writer.dialect.lineterminator)
            if write_header:
                writer.writeheader()
            writer.writerows(record.to_row() for record in records)
    except OSError as e:
        raise FileAccessError(f"Failed to write report '{path}': {e}") from e
    return len(records)


def export_xlsx(path: str, records: List[NormalizedRecord], domain_name: str = "") -> Optional[str]:
    """Write the report as a single-sheet Excel workbook."""
    if not OPENPYXL_AVAILABLE:
        logger.warning("[*] openpyxl not available - Excel export disabled")
        return None

    logger.info("[*] Generating Excel Report...")
    try:
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "PwdLastSet"

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="0066CC", end_color="0066CC", fill_type="solid")
        left_alignment = Alignment(horizontal='left', vertical='top')

        ws.append(REPORT_FIELDS)
        for cell in ws[1]:
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = left_alignment

        column_widths = [len(field) for field in REPORT_FIELDS]
        for record in records:
            # control characters cannot be stored in worksheet cells
            row = [ILLEGAL_CHARACTERS_RE.sub("", record.name), record.last_changed]
            ws.append(row)
            for i, value in enumerate(row):
                column_widths[i] = max(column_widths[i], len(value))

        for i, width in enumerate(column_widths, 1):
            ws.column_dimensions[get_column_letter(i)].width = min(width + 2, 80)
        ws.freeze_panes = "A2"

        if domain_name:
            wb.properties.title = f"pwdLastSet report for {domain_name}"

        wb.save(path)
        logger.info(f"    Exported {os.path.basename(path)} ({len(records)} records)")
        return path
    except (OSError, ValueError, IllegalCharacterError) as e:
        logger.warning(f"    Failed to export {path}: {e}")
        return None


class PwdLastSetReport:
    """Runs one report: guard the output file, query, normalize, write."""

    def __init__(self, config: PwdLastSetConfig, client=None,
                 confirm: Callable[[str], bool] = prompt_overwrite):
        self.config = config
        self.client = client if client is not None else LdapDirectoryClient(config)
        self.confirm = confirm
        self.records: List[NormalizedRecord] = []
        self.start_time: datetime = datetime.now()

    def _run(self):
        prepare_report_file(self.config.output_file, self.config.append, self.confirm)

        if not self.client.connect():
            raise DirectoryConnectionError(
                f"Failed to connect to domain controller {self.config.domain_controller}")

        logger.info(f"[*] Commencing - {datetime.now()}")
        mode = select_mode(self.config.search_base, self.config.user_list)
        raw_records = collect_accounts(self.client, mode)
        if not raw_records:
            raise EmptySourceError("No accounts returned, nothing to write")

        self.records = normalize_records(raw_records)
        written = write_report(self.config.output_file, self.records, append=self.config.append)
        logger.info(f"    Exported {self.config.output_file} ({written} records)")

        if self.config.xlsx_file:
            domain_name = self.config.domain or dn_to_fqdn(getattr(self.client, 'base_dn', ''))
            export_xlsx(self.config.xlsx_file, self.records, domain_name)

    def run(self) -> bool:
        """Run the report. Returns False when the run stopped early."""
        logger.info(f"Starting PyADPwdLastSet at {self.start_time}")
        logger.info(f"Target: {self.config.domain_controller}")
        try:
            self._run()
        except OverwriteDeclined as e:
            logger.warning(f"[!] {e}")
            return False
        except PwdReportError as e:
            logger.error(f"[!] {e}")
            return False

        logger.info(f"[*] Total Execution Time: {datetime.now() - self.start_time}")
        return True

    def close(self):
        self.client.close()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="PyADPwdLastSet - Active Directory password change report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Every user in the domain
  %(prog)s -dc 192.168.1.1 -u admin -p password123 -d DOMAIN.LOCAL -o pwdlastset.csv

  # Users below an OU
  %(prog)s -dc 192.168.1.1 -u admin -p pass -d DOMAIN.LOCAL --search-base "OU=Staff,DC=domain,DC=local"

  # Accounts listed in a file, appended to an existing report
  %(prog)s -dc 192.168.1.1 -u admin -p pass -d DOMAIN.LOCAL -l users.txt -o report.csv --append

PwdLastSet times are written in UTC as M/D/YYYY H:MM:SS AM/PM. A value of 0
means the password was never set or must be changed at next logon; accounts
missing from the directory are listed as "USER NOT FOUND - <name>" with 0.
        """
    )

    parser.add_argument('-dc', '--domain-controller', default='',
                        help='Domain Controller IP or hostname')
    parser.add_argument('-u', '--username', default='',
                        help='Username for authentication')
    parser.add_argument('-p', '--password', default='',
                        help='Password for authentication')

    parser.add_argument('-d', '--domain', default='',
                        help='Domain name (e.g., DOMAIN.LOCAL)')
    parser.add_argument('--auth', choices=['ntlm', 'kerberos'], default='ntlm',
                        help='Authentication method (default: ntlm)')
    parser.add_argument('--ssl', action='store_true',
                        help='Use SSL/TLS (LDAPS)')
    parser.add_argument('--port', type=int, default=389,
                        help='LDAP port (default: 389, use 636 for LDAPS)')
    parser.add_argument('--page-size', type=int, default=500,
                        help='LDAP page size (default: 500)')
    parser.add_argument('-o', '--output', default=None,
                        help='Output CSV file (default: PwdLastSet-Report-<timestamp>.csv)')
    parser.add_argument('--append', action='store_true',
                        help='Append to an existing output file instead of overwriting it')
    parser.add_argument('-b', '--search-base', default='',
                        help='Only report users below this distinguished name')
    parser.add_argument('-l', '--user-list', default='',
                        help='File with one account name per line')
    parser.add_argument('--only-enabled', action='store_true',
                        help='Only report enabled users (ignored with --user-list)')
    parser.add_argument('--xlsx', default='',
                        help='Also write the report to this Excel file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Verbose output')

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> PwdLastSetConfig:
    if not args.domain_controller or not args.username or not args.password:
        raise ConfigurationError("-dc, -u, and -p are required")

    if args.output is None:
        output_file = f"PwdLastSet-Report-{datetime.now().strftime('%Y%m%d%H%M%S')}.csv"
    else:
        output_file = args.output

    return PwdLastSetConfig(
        domain_controller=args.domain_controller,
        domain=args.domain,
        username=args.username,
        password=args.password,
        auth_method=args.auth,
        use_ssl=args.ssl,
        port=636 if args.ssl else args.port,
        page_size=args.page_size,
        output_file=output_file,
        append=args.append,
        search_base=args.search_base,
        user_list=args.user_list,
        only_enabled=args.only_enabled,
        xlsx_file=args.xlsx,
    )


def main(argv=None):
    args = parse_args(argv)

    if args.verbose:
        logger.setLevel(logging.DEBUG)

    try:
        config = build_config(args)
    except ConfigurationError as e:
        print(f"[!] Error: {e}")
        sys.exit(1)

    print(BANNER)
    sys.stdout.flush()

    report = PwdLastSetReport(config)

    try:
        if report.run():
            logger.info(f"[*] Output File: {os.path.abspath(config.output_file)}")
            logger.info("[*] Completed.")
        else:
            logger.error("[!] Report failed")
            sys.exit(1)

    except KeyboardInterrupt:
        logger.warning("\n[!] Interrupted by user")
        sys.exit(1)
    finally:
        report.close()


if __name__ == "__main__":
    main()
