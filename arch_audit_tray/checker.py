"""
Advisory check backed by the ``arch-audit`` command line tool.
"""

from __future__ import annotations

import json
import re
import subprocess
from dataclasses import dataclass
from typing import Any, List, Optional

from arch_audit_tray.logger import get_logger
from arch_audit_tray.status import Update

_LOGGER = get_logger()

DEFAULT_BINARY = "arch-audit"
ADVISORY_URL = "https://security.archlinux.org/{name}"
_ADVISORY_NAME = re.compile(r"^AVG-\d+$")


class CheckerError(RuntimeError):
    """Raised when a check could not produce a list of updates."""


@dataclass
class ArchAuditChecker:
    """
    Runs ``arch-audit --json`` and turns its advisories into updates.

    Calling the instance blocks until the tool exits; there is no timeout
    unless one is configured.
    """

    binary: str = DEFAULT_BINARY
    upgradable_only: bool = True
    timeout: Optional[float] = None

    def command(self) -> List[str]:
        args = [self.binary, "--json"]
        if self.upgradable_only:
            args.append("--upgradable")
        return args

    def __call__(self) -> List[Update]:
        stdout = self._run()
        updates = parse_advisories(stdout)
        _LOGGER.info("arch-audit reported {} affected package(s)", len(updates))
        return updates

    def _run(self) -> str:
        args = self.command()
        _LOGGER.debug("Running {}", " ".join(args))
        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise CheckerError(f"{self.binary} not found") from exc
        except subprocess.TimeoutExpired as exc:
            raise CheckerError(f"{self.binary} timed out after {self.timeout} seconds") from exc
        except OSError as exc:
            raise CheckerError(f"Failed to run {self.binary}: {exc}") from exc

        if completed.returncode != 0:
            stderr = completed.stderr.strip()
            message = f"{self.binary} exited with code {completed.returncode}"
            if stderr:
                message = f"{message}: {stderr[-200:]}"
            raise CheckerError(message)
        return completed.stdout


def parse_advisories(raw: str) -> List[Update]:
    """
    Parse the JSON document printed by ``arch-audit --json``.

    One update is produced per affected package, in the order the tool lists
    them.
    """
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CheckerError(f"arch-audit output is not valid JSON: {exc}") from exc

    if not isinstance(document, list):
        raise CheckerError("arch-audit output must be a JSON list")

    updates: List[Update] = []
    for index, advisory in enumerate(document):
        if not isinstance(advisory, dict):
            raise CheckerError(f"Advisory #{index} is not a JSON object")
        updates.extend(_advisory_updates(advisory, index))
    return updates


def _advisory_updates(advisory: dict, index: int) -> List[Update]:
    name = _require_string(advisory, "name", index)
    # The name becomes part of a URL.
    if not _ADVISORY_NAME.match(name):
        raise CheckerError(f"Advisory #{index} has an unexpected name: {name!r}")

    packages = advisory.get("packages")
    if not isinstance(packages, list) or not packages or not all(isinstance(p, str) for p in packages):
        raise CheckerError(f"Advisory {name} has no valid package list")

    severity = _optional_string(advisory.get("severity")) or "Unknown"
    kind = _optional_string(advisory.get("type")) or "unknown"
    fixed = _optional_string(advisory.get("fixed"))

    summary = f"{severity} {kind}"
    if fixed:
        summary = f"{summary} (fixed in {fixed})"
    link = ADVISORY_URL.format(name=name)
    return [Update(text=f"{package}: {summary}", link=link) for package in packages]


def _require_string(advisory: dict, key: str, index: int) -> str:
    value = _optional_string(advisory.get(key))
    if value is None:
        raise CheckerError(f"Advisory #{index} is missing '{key}'")
    return value


def _optional_string(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
