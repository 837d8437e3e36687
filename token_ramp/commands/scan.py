"""Match layer colours to the nearest existing token by ΔE (CIE76, LAB).

Every token/mode pair in the collection holding a direct colour (aliases
are ignored) forms the reference palette. Each selected layer's rendered
colour is compared against all of it; the closest reference decides:

    ΔE < 0.5        auto-connect   the layer is bound to the token
    0.5 <= ΔE < 10  suggest        listed for review, closest first
    ΔE >= 10        no match

Layers already bound to a token, and layers without a solid fill, are
skipped. Ties go to the first token in collection order.

Requires --collection.

Example:
    token-ramp scan document.json --collection Colors
    token-ramp scan document.json --collection Colors --json
"""

from dataclasses import replace

from token_ramp.core.compositor import rendered_colour
from token_ramp.core.matcher import PerceptualMatcher, reference_palette
from token_ramp.core.target import resolve_collection
from token_ramp.core.types import Command, Document, Report

command = Command(
    name='scan',
    help='Match layer colours to existing tokens by ΔE. Auto-connect or suggest.',
)


@command.run
def run(document: Document, report: Report, args) -> None:
    if not document.selection:
        report.fail('Please select at least one layer')
        return

    snapshot = resolve_collection(document, report, args)
    if snapshot is None:
        return
    report.collection = snapshot.name

    palette = reference_palette(snapshot)
    if not palette:
        report.warn(f'Collection {snapshot.name!r} has no direct colour values to match against')
    matcher = PerceptualMatcher(palette)

    queries = []
    for layer in document.selection:
        colour = rendered_colour(layer)
        if layer.bound_token or colour is None:
            report.record_skip()
            continue
        queries.append((layer.name, colour))

    matches = matcher.match_all(queries)
    report.matches = matches

    bindings = {(m.layer, m.query): m.token for m in matches.connections}
    for i, layer in enumerate(document.selection):
        if layer.bound_token:
            continue
        token = bindings.get((layer.name, rendered_colour(layer)))
        if token is not None:
            document.selection[i] = replace(layer, bound_token=token)
