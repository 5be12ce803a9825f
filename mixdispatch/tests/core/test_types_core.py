# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from typing import Any

from mixdispatch.core.types_core import (
	Capability,
	ConversionKind,
	conversion_kind,
	declared_capabilities,
	declares_member,
	is_capability,
)


class Greets(Capability):
	pass


class LoudGreets(Greets):
	pass


class Base:
	def hello(self) -> str:
		return "hi"


class Derived(Base, LoudGreets):
	pass


class Virtual:
	pass


Greets.register(Virtual)


def test_capability_marker_only_applies_to_pure_capabilities():
	assert is_capability(Greets)
	assert is_capability(LoudGreets)
	assert not is_capability(Derived)
	assert not is_capability(Base)
	assert not is_capability(Capability)


def test_declared_capabilities_follow_mro():
	assert declared_capabilities(Derived) == [LoudGreets, Greets]
	assert declared_capabilities(Greets) == [Greets]
	assert declared_capabilities(Base) == []


def test_virtual_subclass_satisfies_but_does_not_declare():
	assert isinstance(Virtual(), Greets)
	assert declared_capabilities(Virtual) == []


def test_declares_member_walks_class_bodies_only():
	assert declares_member(Base, "hello")
	assert declares_member(Derived, "hello")
	assert not declares_member(Derived, "goodbye")
	# Machinery inherited from object/ABC never counts.
	assert not declares_member(Greets, "register")
	assert not declares_member(Base, "__init_subclass__")

	obj = Base()
	obj.instance_only = lambda: None
	assert not declares_member(Base, "instance_only")


def test_conversion_ranking_order():
	assert conversion_kind(int, int) is ConversionKind.EXACT
	assert conversion_kind(Derived, Base) is ConversionKind.REFERENCE
	assert conversion_kind(Derived, Greets) is ConversionKind.REFERENCE
	assert conversion_kind(int, float) is ConversionKind.NUMERIC
	assert conversion_kind(bool, float) is ConversionKind.NUMERIC
	assert conversion_kind(str, object) is ConversionKind.BOXING
	assert conversion_kind(str, Any) is ConversionKind.BOXING
	assert ConversionKind.EXACT < ConversionKind.REFERENCE < ConversionKind.NUMERIC < ConversionKind.BOXING


def test_conversion_rejects_narrowing_and_unrelated():
	assert conversion_kind(float, int) is None
	assert conversion_kind(str, int) is None
	assert conversion_kind(Base, Derived) is None
	# Dynamic-only capability satisfaction is not a conversion.
	assert conversion_kind(Virtual, Greets) is None
