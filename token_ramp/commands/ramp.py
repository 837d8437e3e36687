"""Derive Opaque and Opacity ramp tokens from key colours on the canvas.

Each selected layer is a key colour: its name carries the scale position
('300', 'Brand 700', '500 (Dark)') and its parent container names the ramp
group. The colour used is the layer's rendered colour: fill colour at
fill opacity x layer opacity, composited over the parent's solid fill
(white when the parent has none).

Per group, positions 0-500 form the Light half and 500-1000 the Dark half.
Positions between keys are interpolated; positions outside the key range
are lightened (Light) or darkened (Dark) from the nearest key with a stepped
falloff. A half without keys falls back to gray and is reported as a warning.

Tokens written per group and position:
  <group>/Opaque/<ppp>    the ramp colour
  <group>/Opacity/<ppp>   one representative colour with a translucency scale
                          (alpha .20 .48 .64 .88 .94 1.0 .94 .88 .64 .48 .20)

Existing tokens with the same name are updated in place; others are created.
Tokens that are no longer produced are left untouched.

Opacity policy (--policy or TOKEN_RAMP_OPACITY_POLICY):
  reuse    the key at (or nearest to) 500 in each half        (default)
  boosted  as reuse for Light; Dark uses the opaque 700 step
           with +7% saturation and +2% lightness

Example:
    token-ramp ramp document.json --collection Colors --out updated.json
"""

from token_ramp.core.layer_parser import collect_keys
from token_ramp.core.merger import MemoryTokenStore, plan_writes
from token_ramp.core.ramp import generate_ramps, split_keys
from token_ramp.core.target import policy_from, replace_collection, resolve_collection, settings_from
from token_ramp.core.types import Command, Document, Mode, Report

command = Command(
    name='ramp',
    help='Derive Opaque/Opacity ramp tokens from key colour layers, grouped by parent.',
)


@command.run
def run(document: Document, report: Report, args) -> None:
    if not document.selection:
        report.fail('Please select at least one layer')
        return

    snapshot = resolve_collection(document, report, args, create_modes=[Mode.LIGHT.value, Mode.DARK.value])
    if snapshot is None:
        return
    report.collection = snapshot.name

    selection = collect_keys(document.selection)
    report.record_skip(len(selection.skipped))
    if not selection.groups:
        report.warn('No key colours found: layer names need a scale position such as 300 or 500 (Dark)')
        return

    policy = policy_from(args, settings_from(args))
    store = MemoryTokenStore(snapshot)
    for result in generate_ramps(selection.groups, policy):
        writes = plan_writes(snapshot, result.entries)
        store.apply(writes)
        report.record_writes(writes)

        light, dark = split_keys(selection.groups[result.group])
        new = sum(1 for w in writes if w.is_new)
        report.add(
            result.group,
            {'light_keys': len(light), 'dark_keys': len(dark), 'new': new, 'updated': len(writes) - new},
        )
        for warning in result.warnings:
            report.warn(warning)

    replace_collection(document, store.snapshot())
