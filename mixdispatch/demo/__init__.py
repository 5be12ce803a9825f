"""
mixdispatch.demo: message entities and the escalation mixins.

Modules:
  - messages: capabilities and message dataclasses
  - mixins: registered mixins plus the shared registry/resolver
"""

__all__ = [
    "messages",
    "mixins",
]
