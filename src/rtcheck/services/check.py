"""CheckService — validate a JSON document against an importable descriptor.

Targets use entry-point syntax, ``package.module:attribute`` (dotted
attributes allowed after the colon), and must resolve to a Descriptor.
"""

from __future__ import annotations

import importlib
import json
import logging
from typing import Any

from rtcheck.core import toggle as _toggle
from rtcheck.core.descriptors import Descriptor
from rtcheck.core.errors import ContractViolation
from rtcheck.core.kinds import kind_of
from rtcheck.core.toggle import SupportsEnabled
from rtcheck.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

OP = "check"


class TargetError(LookupError):
    """The target string does not name an importable descriptor."""


def resolve_target(target: str) -> Descriptor:
    """Import ``module:attr.path`` and return the descriptor it names.

    Raises:
        TargetError: On a malformed target, a failed import, a missing
            attribute, or an attribute that is not a Descriptor.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        msg = f"Target must look like 'package.module:attribute', got {target!r}"
        raise TargetError(msg)
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import {module_name!r}: {exc}"
        raise TargetError(msg) from exc
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            msg = f"{module_name!r} has no attribute {attr_path!r}"
            raise TargetError(msg) from exc
    if not isinstance(obj, Descriptor):
        msg = f"{target!r} is a {type(obj).__qualname__}, not a descriptor"
        raise TargetError(msg)
    return obj


class CheckService:
    """Run one descriptor against one decoded JSON document.

    Parameters:
        toggle: Switch to honour; defaults to the global CHECKS.
    """

    def __init__(self, toggle: SupportsEnabled | None = None) -> None:
        self._toggle = toggle

    def _enabled(self) -> bool:
        toggle = self._toggle if self._toggle is not None else _toggle.CHECKS
        return toggle.enabled

    def check(self, target: str, document: str) -> ServiceResult:
        try:
            descriptor = resolve_target(target)
        except TargetError as exc:
            return ServiceResult.failure(OP, ErrorCode.INVALID_TARGET, str(exc), target=target)

        try:
            value = json.loads(document)
        except json.JSONDecodeError as exc:
            return ServiceResult.failure(
                OP, ErrorCode.INVALID_DOCUMENT, f"Document is not valid JSON: {exc}"
            )

        data: dict[str, Any] = {
            "target": target,
            "descriptor": repr(descriptor),
            "kind": str(kind_of(value)),
        }
        if not self._enabled():
            logger.debug("Checks disabled; skipping %s", target)
            return ServiceResult.success(OP, **data, skipped=True)

        try:
            descriptor(value)
        except ContractViolation as exc:
            return ServiceResult.from_violation(OP, exc, target=target)
        return ServiceResult.success(OP, **data, skipped=False)
