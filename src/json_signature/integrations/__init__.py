"""Integrations subpackage for json-signature.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point), providing the
  ``assert_json_equal`` fixture
"""

from __future__ import annotations

__all__: list[str] = []
