# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for resolution failures.

Resolution errors are raised at the call site; the resolver additionally keeps
a Diagnostic per failure so a caller can inspect what went wrong after the
fact without parsing exception messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Diagnostic:
	"""Represents a resolution diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	phase: str | None = None
	severity: str = "error"
	# Human-readable call site, e.g. "DynamicMessage.escalated1(int)".
	site: str | None = None
	notes: list[str] = field(default_factory=list)


__all__ = ["Diagnostic"]
