"""Auto-discovery of command modules.

Every .py file in this package that defines a `command` object is
auto-registered by token_ramp.registry.discover().

The explicit imports below ensure PyInstaller includes these modules
in the frozen binary. Without them, pkgutil.iter_modules cannot find
the command files at runtime.
"""

# PyInstaller hidden imports: keep in sync with the command modules
import token_ramp.commands.collections as _collections  # noqa: F401
import token_ramp.commands.create as _create  # noqa: F401
import token_ramp.commands.ramp as _ramp  # noqa: F401
import token_ramp.commands.scan as _scan  # noqa: F401
