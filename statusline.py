"""Helpers used by the status-line script."""

import re

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")
_CURRENT_DIR_RE = re.compile(r'.*"current_dir":"([^"]*)"')


def format_memory(kb: str) -> str:
    """Render a kilobyte count as whole megabytes or tenths of a gigabyte.

    Tenths are truncated, not rounded: 1047552 KB is "1023M" and
    1049600 KB is "1.0G". Anything unparsable or not positive is "0M".
    """
    text = kb.strip()
    # Plain ASCII digits only; int() alone would take "1_024" and other scripts
    if not _DECIMAL_RE.fullmatch(text):
        return "0M"
    value = int(text)
    if value <= 0:
        return "0M"

    mb = value // 1024
    if mb >= 1024:
        gb_tenths = mb * 10 // 1024
        return f"{gb_tenths // 10}.{gb_tenths % 10}G"
    return f"{mb}M"


def extract_current_dir(payload: str) -> str:
    """Return the value of the last ``"current_dir":"..."`` pair in a JSON blob."""
    flattened = payload.replace("\r\n", "\n").replace("\n", "")
    match = _CURRENT_DIR_RE.match(flattened)
    if match is None:
        return ""
    return match.group(1)
