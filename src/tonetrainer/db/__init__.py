"""Flat-file persistence.

Provides:
- JsonListStore: a JSON document holding one top-level array
- StoreError: raised on any read/parse/write failure
"""

from tonetrainer.db.json_store import JsonListStore, StoreError

__all__ = ["JsonListStore", "StoreError"]
