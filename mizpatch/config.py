from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import DEFAULT_SEARCH, DEFAULT_REPLACE


@dataclass(frozen=True)
class ReplaceConfig:
    search: str = DEFAULT_SEARCH
    replace: str = DEFAULT_REPLACE


def resolve_replace_config(
    search: Optional[str] = None,
    replace: Optional[str] = None,
) -> Tuple[ReplaceConfig, List[str]]:
    """Fill missing values from the defaults.

    Args:
        search: Search string from the command line, or None when omitted.
        replace: Replace string from the command line, or None when omitted.

    Returns:
        The resolved config and the names of the fields that fell back to
        their defaults, in field order.
    """
    defaulted: List[str] = []
    if search is None:
        search = DEFAULT_SEARCH
        defaulted.append("search")
    if replace is None:
        replace = DEFAULT_REPLACE
        defaulted.append("replace")
    return ReplaceConfig(search=search, replace=replace), defaulted
