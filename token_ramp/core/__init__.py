"""token_ramp.core — Foundation layer.

Contains the colour maths, ramp generator, matcher, token merger, layer-name
parser, document codec, settings and report builder.
This module has NO dependencies on token_ramp.commands or token_ramp.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
