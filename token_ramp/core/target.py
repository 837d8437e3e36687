"""Resolve the collection a command works on, and the settings it runs with."""

import logging
import uuid
from collections.abc import Sequence
from typing import Any

from token_ramp.core.config import Settings, parse_policy
from token_ramp.core.types import CollectionMode, Document, OpacityPolicy, Report, TokenSnapshot

logger = logging.getLogger(__name__)


def settings_from(args: Any) -> Settings:
    """Settings attached by the CLI, else read from the environment."""
    settings = getattr(args, 'settings', None)
    return settings if isinstance(settings, Settings) else Settings.from_env()


def policy_from(args: Any, settings: Settings) -> OpacityPolicy:
    value = getattr(args, 'policy', None)
    return parse_policy(value) if value else settings.opacity_policy


def find_collection(document: Document, ref: str) -> TokenSnapshot | None:
    """Look up by id first, then by exact name."""
    by_id = next((c for c in document.collections if c.id == ref), None)
    if by_id is not None:
        return by_id
    return next((c for c in document.collections if c.name == ref), None)


def resolve_collection(
    document: Document,
    report: Report,
    args: Any,
    *,
    create_modes: Sequence[str] | None = None,
) -> TokenSnapshot | None:
    """Collection named by --collection, or a new one when create_modes is given.

    Failures are recorded on the report and return None.
    """
    ref = getattr(args, 'collection', None)
    if ref:
        snapshot = find_collection(document, ref)
        if snapshot is None:
            report.fail(f'Collection not found: {ref}')
        return snapshot

    if create_modes is None:
        report.fail('No collection given. Use --collection ID|NAME')
        return None

    name = settings_from(args).collection_name
    snapshot = TokenSnapshot(
        id=f'collection:{uuid.uuid4().hex[:12]}',
        name=name,
        modes=[CollectionMode(id=f'mode:{uuid.uuid4().hex[:12]}', name=m) for m in create_modes],
    )
    document.collections.append(snapshot)
    logger.info('Created collection %r', name)
    return snapshot


def replace_collection(document: Document, snapshot: TokenSnapshot) -> None:
    """Swap the collection with snapshot.id for snapshot inside document."""
    for i, c in enumerate(document.collections):
        if c.id == snapshot.id:
            document.collections[i] = snapshot
            return
    document.collections.append(snapshot)
