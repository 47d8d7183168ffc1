"""
The ``format`` keyword table.

Each entry pairs a checker with the preview budget used when quoting the
offending value. Formats missing from the table are advisory and always
pass.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable

# https://tools.ietf.org/html/rfc3339
DATE_RE = re.compile(r"(\d{4})-(\d\d)-(\d\d)", re.ASCII)
TIME_RE = re.compile(r"(\d\d):(\d\d):(\d\d)(?:\.\d+)?(?:[Zz]|[+-](\d\d):(\d\d))?", re.ASCII)

HOSTNAME_LABEL_RE = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?", re.ASCII)
EMAIL_LOCAL_RE = re.compile(r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*", re.ASCII)
IDN_EMAIL_LOCAL_RE = re.compile(r"[^\s@\"(),:;<>\[\]\\.]+(?:\.[^\s@\"(),:;<>\[\]\\.]+)*")

# https://tools.ietf.org/html/rfc3986#appendix-B
URI_RE = re.compile(r"(([^:/?#]+):)?(//([^/?#]*))?([^?#]*)(\?([^#]*))?(#(.*))?", re.DOTALL)
URI_PUNCTUATION = frozenset(":/?#[]@!$&'()*+,;=._~-%")

# https://tools.ietf.org/html/rfc6570
URI_TEMPLATE_RE = re.compile(
    r"(?:[^\s{}\"'<>\\^`|]|\{[+#./;?&]?\w+(?:\*|:\d+)?(?:,\w+(?:\*|:\d+)?)*\})*",
    re.ASCII,
)

# https://tools.ietf.org/html/rfc6901
JSON_POINTER_RE = re.compile(r"(?:/(?:[^~/]|~[01])*)*")
RELATIVE_JSON_POINTER_RE = re.compile(r"\d+(?:#|(?:/(?:[^~/]|~[01])*)*)", re.ASCII)


def is_date(value: str) -> bool:
    match = DATE_RE.fullmatch(value)
    if match is None:
        return False
    try:
        date(*(int(part) for part in match.groups()))
    except ValueError:
        return False
    return True


def is_time(value: str) -> bool:
    match = TIME_RE.fullmatch(value)
    if match is None:
        return False
    hour, minute, second, offset_hour, offset_minute = match.groups()
    if int(hour) > 23 or int(minute) > 59 or int(second) > 60:
        return False
    if offset_hour is not None and (int(offset_hour) > 23 or int(offset_minute) > 59):
        return False
    return True


def is_date_time(value: str) -> bool:
    if len(value) < 11 or value[10] not in "Tt ":
        return False
    return is_date(value[:10]) and is_time(value[11:])


def is_hostname(value: str) -> bool:
    if not value or len(value) > 253:
        return False
    name = value[:-1] if value.endswith(".") else value
    return all(HOSTNAME_LABEL_RE.fullmatch(label) for label in name.split("."))


def is_idn_hostname(value: str) -> bool:
    try:
        ascii_name = value.encode("idna").decode("ascii")
    except UnicodeError:
        return False
    return is_hostname(ascii_name)


def is_email(value: str) -> bool:
    local, at, domain = value.rpartition("@")
    return bool(at) and bool(EMAIL_LOCAL_RE.fullmatch(local)) and is_hostname(domain)


def is_idn_email(value: str) -> bool:
    local, at, domain = value.rpartition("@")
    return bool(at) and bool(IDN_EMAIL_LOCAL_RE.fullmatch(local)) and is_idn_hostname(domain)


def is_ipv4(value: str) -> bool:
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_ipv6(value: str) -> bool:
    if "%" in value:
        return False
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


def _is_uri_like(value: str, *, unicode: bool, scheme_required: bool) -> bool:
    match = URI_RE.fullmatch(value)
    if match is None:
        return False
    for char in value:
        if char in URI_PUNCTUATION or (char.isascii() and char.isalnum()):
            continue
        if unicode and char.isalnum():
            continue
        return False
    return not scheme_required or bool(match.group(2))


def is_uri(value: str) -> bool:
    return _is_uri_like(value, unicode=False, scheme_required=True)


def is_uri_reference(value: str) -> bool:
    return _is_uri_like(value, unicode=False, scheme_required=False)


def is_iri(value: str) -> bool:
    return _is_uri_like(value, unicode=True, scheme_required=True)


def is_iri_reference(value: str) -> bool:
    return _is_uri_like(value, unicode=True, scheme_required=False)


def is_uri_template(value: str) -> bool:
    return URI_TEMPLATE_RE.fullmatch(value) is not None


def is_json_pointer(value: str) -> bool:
    return JSON_POINTER_RE.fullmatch(value) is not None


def is_relative_json_pointer(value: str) -> bool:
    return RELATIVE_JSON_POINTER_RE.fullmatch(value) is not None


def is_regex(value: str) -> bool:
    # only non-emptiness is checked, the expression is not compiled
    return len(value) > 0


@dataclass(frozen=True)
class FormatRule:
    check: Callable[[str], bool]
    preview_length: int = 64


FORMATS: dict[str, FormatRule] = {
    "date-time": FormatRule(is_date_time, 32),
    "time": FormatRule(is_time, 32),
    "date": FormatRule(is_date, 10),
    "email": FormatRule(is_email),
    "idn-email": FormatRule(is_idn_email),
    "hostname": FormatRule(is_hostname),
    "idn-hostname": FormatRule(is_idn_hostname),
    "ipv4": FormatRule(is_ipv4, 20),
    "ipv6": FormatRule(is_ipv6, 45),
    "uri": FormatRule(is_uri),
    "uri-reference": FormatRule(is_uri_reference),
    "iri": FormatRule(is_iri),
    "iri-reference": FormatRule(is_iri_reference),
    "uri-template": FormatRule(is_uri_template),
    "json-pointer": FormatRule(is_json_pointer),
    "relative-json-pointer": FormatRule(is_relative_json_pointer),
    "regex": FormatRule(is_regex),
}
