"""Reconcile computed (name, mode, value) entries against a collection.

plan_writes decides update-vs-create by exact, case-sensitive name within one
collection snapshot. A name created earlier in the same batch is treated as
existing for later entries, so the new/updated counts always sum to the
batch size. MemoryTokenStore applies a write set to a copy of the snapshot,
adding modes by name when the collection lacks them.
"""

import copy
import logging
import uuid
from collections.abc import Iterable

from token_ramp.core.types import (
    RGBA,
    CollectionMode,
    Direct,
    RampEntry,
    Token,
    TokenSnapshot,
    TokenWrite,
)

logger = logging.getLogger(__name__)


def reconcile(snapshot: TokenSnapshot, entry: RampEntry) -> TokenWrite:
    """Decide one entry against the snapshot alone."""
    existing = snapshot.get_token(entry.name)
    if existing is not None:
        return TokenWrite(entry.name, entry.mode, entry.value, is_new=False, token_id=existing.id)
    return TokenWrite(entry.name, entry.mode, entry.value, is_new=True)


def plan_writes(snapshot: TokenSnapshot, entries: Iterable[RampEntry]) -> list[TokenWrite]:
    """Decide a whole batch, in order."""
    pending: set[str] = set()
    writes = []
    for entry in entries:
        write = reconcile(snapshot, entry)
        if write.is_new and entry.name in pending:
            write = TokenWrite(entry.name, entry.mode, entry.value, is_new=False)
        pending.add(entry.name)
        writes.append(write)
    return writes


def _new_id(prefix: str) -> str:
    return f'{prefix}:{uuid.uuid4().hex[:12]}'


class MemoryTokenStore:
    """In-memory TokenStore over a copy of one collection snapshot."""

    def __init__(self, snapshot: TokenSnapshot):
        self._snapshot = copy.deepcopy(snapshot)

    def snapshot(self) -> TokenSnapshot:
        return copy.deepcopy(self._snapshot)

    def get_token(self, name: str) -> Token | None:
        return self._snapshot.get_token(name)

    def mode_id(self, mode: str) -> str:
        """Id of the named mode, adding the mode when missing."""
        existing = self._snapshot.mode_named(mode)
        if existing is not None:
            return existing.id
        added = CollectionMode(id=_new_id('mode'), name=mode)
        self._snapshot.modes.append(added)
        logger.debug('Added mode %r to collection %s', mode, self._snapshot.name)
        return added.id

    def put_token(self, name: str, mode: str, value: RGBA) -> None:
        mode_id = self.mode_id(mode)
        token = self._snapshot.get_token(name)
        if token is None:
            token = Token(id=_new_id('var'), name=name)
            self._snapshot.tokens.append(token)
        token.values[mode_id] = Direct(value)

    def apply(self, writes: Iterable[TokenWrite]) -> None:
        for w in writes:
            self.put_token(w.name, w.mode, w.value)
