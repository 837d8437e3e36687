"""List the token collections in a document: id, name, modes and token count.

The ids printed here are what --collection accepts; names work too.
No selection is needed and nothing is written.

With --collection only that collection is listed, and an unknown id or
name is an error.

Example:
    token-ramp collections document.json
    token-ramp collections document.json --collection Colors --json
"""

from token_ramp.core.target import find_collection
from token_ramp.core.types import Command, Document, Report

command = Command(
    name='collections',
    help='List token collections (id, name, modes, token count).',
)


@command.run
def run(document: Document, report: Report, args) -> None:
    ref = getattr(args, 'collection', None)
    if ref:
        snapshot = find_collection(document, ref)
        if snapshot is None:
            report.fail(f'Collection not found: {ref}')
            return
        report.collection = snapshot.name
        snapshots = [snapshot]
    else:
        snapshots = document.collections

    report.listing = [
        {
            'id': c.id,
            'name': c.name,
            'modes': [m.name for m in c.modes],
            'tokens': len(c.tokens),
        }
        for c in snapshots
    ]
    if not snapshots:
        report.warn('Document has no collections; ramp and create will make one')
