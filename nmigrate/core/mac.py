"""MAC address parsing utilities."""

import re


_MAC_RE = re.compile(r"^[0-9a-fA-F]{2}([:-]?)(?:[0-9a-fA-F]{2}\1){4}[0-9a-fA-F]{2}$")


def normalize_mac(value: str) -> str:
    """Return a MAC address as upper-case colon separated octets."""

    value = value.strip()
    if not _MAC_RE.match(value):
        raise ValueError(f"Invalid MAC address: {value!r}")

    digits = re.sub(r"[:-]", "", value).upper()
    return ":".join(digits[i : i + 2] for i in range(0, 12, 2))

