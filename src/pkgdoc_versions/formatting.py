# SPDX-License-Identifier: MIT
"""Human-readable renderings of module versions.

Display forms:

- Release ``v1.2.3`` and short pre-release ``v1.2.3-alpha.1``: unchanged.
- Long pre-release: the tag is cut to the configured limit and ``...`` is
  appended, e.g. ``v1.2.3-alpha.very.long.ta...``. Build metadata is kept.
- Pseudo-version ``v1.0.0-20190311183353-d8887717615a``: the timestamp is
  elided and the commit hash abbreviated, giving ``v1.0.0-...-d888771``.

The full version string stays available on every VersionSummary; display
forms only bound the width of a row.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from .config import DEFAULT_CONFIG, VersionsConfig
from .errors import MalformedVersionError
from .semver import ClassifiedVersion, VersionKind, classify

logger = logging.getLogger(__name__)

ELLIPSIS = "..."

# Month names for %b, fixed so dates read the same under any locale.
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_version(cv: ClassifiedVersion, config: Optional[VersionsConfig] = None) -> str:
    """Return the display text for a classified version.

    Args:
        cv: A classified version
        config: Formatting limits (defaults to DEFAULT_CONFIG)

    Returns:
        The display text

    Examples:
        >>> format_version(classify("v1.0.0-20190311183353-d8887717615a"))
        'v1.0.0-...-d888771'
        >>> format_version(classify("v1.2.3-alpha.1"))
        'v1.2.3-alpha.1'
    """
    config = config or DEFAULT_CONFIG
    suffix = f"+{cv.build}" if cv.build else ""

    if cv.kind is VersionKind.RELEASE:
        return cv.version
    if cv.kind is VersionKind.PRERELEASE:
        limit = config.prerelease_display_limit
        if len(cv.prerelease) <= limit:
            return cv.version
        return f"{cv.base_version}-{cv.prerelease[:limit]}{ELLIPSIS}{suffix}"
    if cv.kind is VersionKind.PSEUDO:
        commit = cv.pseudo_hash[: config.commit_abbrev_len]
        return f"{cv.pseudo_base}-{ELLIPSIS}-{commit}{suffix}"
    raise ValueError(f"unhandled version kind: {cv.kind!r}")


def format_version_string(version: str, config: Optional[VersionsConfig] = None) -> str:
    """Return the display text for a version string.

    On any parsing error the input is returned unmodified.
    """
    try:
        cv = classify(version)
    except MalformedVersionError as e:
        logger.debug("Not formatting %r: %s", version, e)
        return version
    return format_version(cv, config)


def format_commit_time(when: datetime, config: Optional[VersionsConfig] = None) -> str:
    """Return an absolute commit date such as ``Mar 11, 2019``.

    ``%b`` always gives the English month abbreviation, whatever the locale.

    Examples:
        >>> format_commit_time(datetime(2019, 3, 1, 18, 33, 53))
        'Mar 1, 2019'
    """
    config = config or DEFAULT_CONFIG
    fmt = config.commit_time_format.replace("{day}", str(when.day))
    fmt = fmt.replace("%b", MONTH_ABBREVIATIONS[when.month - 1])
    return when.strftime(fmt)
