"""Create or update one token per selected layer, named after the layer.

Every selected layer with a solid fill becomes a colour token. The layer
name is the token name; a ' -mode' suffix picks the mode:

    'primary/500 -Dark'  -> token 'primary/500', mode 'Dark'
    'primary/500'        -> token 'primary/500', the collection's first mode

Modes missing from the collection are added. The value is the fill colour
with the fill opacity as alpha. Layers without a solid fill are skipped.

Without --collection a new collection is created, named by
TOKEN_RAMP_COLLECTION (default 'Color Variables').

Example:
    token-ramp create document.json --collection Colors --out updated.json
"""

from token_ramp.core.config import DEFAULT_MODE_NAME
from token_ramp.core.layer_parser import split_mode_suffix
from token_ramp.core.merger import MemoryTokenStore, plan_writes
from token_ramp.core.target import replace_collection, resolve_collection
from token_ramp.core.types import Command, Document, RampEntry, Report, Solid

command = Command(
    name='create',
    help="Create/update one token per solid-fill layer ('name -mode' picks the mode).",
)


@command.run
def run(document: Document, report: Report, args) -> None:
    if not document.selection:
        report.fail('Please select at least one layer')
        return

    snapshot = resolve_collection(document, report, args, create_modes=[DEFAULT_MODE_NAME])
    if snapshot is None:
        return
    report.collection = snapshot.name
    default_mode = snapshot.modes[0].name if snapshot.modes else DEFAULT_MODE_NAME

    entries = []
    for layer in document.selection:
        if not isinstance(layer.fill, Solid):
            report.record_skip()
            continue
        name, mode = split_mode_suffix(layer.name)
        entries.append(RampEntry(name=name, mode=mode or default_mode, value=(*layer.fill.color, layer.fill.opacity)))

    writes = plan_writes(snapshot, entries)
    store = MemoryTokenStore(snapshot)
    store.apply(writes)
    report.record_writes(writes)
    replace_collection(document, store.snapshot())
