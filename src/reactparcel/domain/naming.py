"""npm package-name rules for new projects.

Mirrors the rule set of npm's ``validate-npm-package-name``: hard errors
make a name unusable anywhere, warnings make it unusable for *new*
packages. A project name is accepted only with neither.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from pydantic import BaseModel, Field

MAX_NAME_LENGTH = 214

BLACKLISTED_NAMES = frozenset({"node_modules", "favicon.ico"})

# Node core modules; a package must not shadow one.
CORE_MODULE_NAMES = frozenset(
    {
        "assert",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "diagnostics_channel",
        "dns",
        "domain",
        "events",
        "fs",
        "http",
        "http2",
        "https",
        "inspector",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "stream",
        "string_decoder",
        "sys",
        "timers",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

_SCOPED_NAME = re.compile(r"^(?:@([^/]+?)/)?([^/]+?)$")
_SPECIAL_CHARS = re.compile(r"[~'!()*]")

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_URL_SAFE = "-_.!~*'()"


class NameValidation(BaseModel):
    """Outcome of checking a proposed project name."""

    model_config = {"frozen": True}

    valid: bool
    problems: list[str] = Field(default_factory=list)


def _url_friendly(value: str) -> bool:
    # undecodable argv bytes arrive as surrogates; escape them instead of raising
    return quote(value, safe=_URL_SAFE, errors="surrogateescape") == value


def _collect(name: str) -> tuple[list[str], list[str]]:
    """Return ``(errors, warnings)`` for *name*."""
    errors: list[str] = []
    warnings: list[str] = []

    if not name:
        errors.append("name length must be greater than zero")

    if name.startswith("."):
        errors.append("name cannot start with a period")

    if name.startswith("_"):
        errors.append("name cannot start with an underscore")

    if name.strip() != name:
        errors.append("name cannot contain leading or trailing spaces")

    lowered = name.lower()
    if lowered in BLACKLISTED_NAMES:
        errors.append(f"{lowered} is a blacklisted name")

    if lowered in CORE_MODULE_NAMES:
        warnings.append(f"{lowered} is a core module name")

    if len(name) > MAX_NAME_LENGTH:
        warnings.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")

    if lowered != name:
        warnings.append("name can no longer contain capital letters")

    if _SPECIAL_CHARS.search(name.split("/")[-1]):
        warnings.append("name can no longer contain special characters (\"~'!()*\")")

    if not _url_friendly(name):
        match = _SCOPED_NAME.match(name)
        scoped_ok = False
        if match:
            user, package = match.group(1), match.group(2)
            scoped_ok = user is not None and _url_friendly(user) and _url_friendly(package)
        if not scoped_ok:
            errors.append("name can only contain URL-friendly characters")

    return errors, warnings


def validate_npm_name(name: str) -> NameValidation:
    """Check *name* against npm naming rules for new packages.

    Every violated rule is reported, errors first and then warnings,
    in rule order.

    Examples:
        >>> validate_npm_name("my-app").valid
        True
        >>> validate_npm_name("NODE_MODULES").problems
        ['node_modules is a blacklisted name', 'name can no longer contain capital letters']
    """
    errors, warnings = _collect(name)
    if not errors and not warnings:
        return NameValidation(valid=True)
    return NameValidation(valid=False, problems=[*errors, *warnings])


def printable_name(name: str) -> str:
    """*name* with undecodable filesystem bytes replaced by U+FFFD."""
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
