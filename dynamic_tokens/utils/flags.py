"""Namespaced flag store helpers.

Flags live on documents as ``flags[scope][key]``. Setters return a new
document via ``dataclasses.replace``; the stored value is frozen so documents
remain hashable value objects.
"""

from dataclasses import replace
from typing import Any, Optional, TypeVar, Union

from pyrsistent import freeze, pmap

from dynamic_tokens.documents import Actor, Token

Document = TypeVar("Document", Actor, Token)


def get_flag(document: Union[Actor, Token], scope: str, key: str) -> Optional[Any]:
    """Return the flag value or ``None`` when unset."""
    return document.flags.get(scope, pmap()).get(key)


def set_flag(document: Document, scope: str, key: str, value: Any) -> Document:
    """Return a copy of ``document`` with ``flags[scope][key] = value``."""
    scoped = document.flags.get(scope, pmap()).set(key, freeze(value))
    return replace(document, flags=document.flags.set(scope, scoped))


def unset_flag(document: Document, scope: str, key: str) -> Document:
    """Return a copy of ``document`` without ``flags[scope][key]``."""
    scoped = document.flags.get(scope, pmap()).discard(key)
    if not scoped:
        return replace(document, flags=document.flags.discard(scope))
    return replace(document, flags=document.flags.set(scope, scoped))
