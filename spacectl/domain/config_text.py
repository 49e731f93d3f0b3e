from __future__ import annotations

from typing import Dict


def parse_configuration(text: str) -> Dict[str, str]:
    """
    Parse newline-separated ``key = value`` pairs into a mapping.

    Whitespace around keys and values is trimmed. Blank lines are skipped.
    There is no comment syntax: ``#`` is an ordinary character. A line
    without ``=`` is rejected, and the first ``=`` splits key from value so
    values may themselves contain ``=``. Later keys overwrite earlier ones.
    """
    result: Dict[str, str] = {}
    for lineno, raw in enumerate(str(text or "").splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"line {lineno}: expected 'key = value', got {raw.strip()!r}")
        result[key] = value.strip()
    return result


__all__ = ["parse_configuration"]
