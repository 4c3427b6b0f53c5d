"""Target resolution — resolves ``"module:attribute"`` strings to route collections.

Shared utility used by ``grove routes`` and ``grove call`` to locate a
RouteCollection (or a root Group to compile) from a user-supplied import
string.
"""

import importlib

from grove.routing.collection import RouteCollection
from grove.routing.group import Group


def resolve_collection(import_string: str) -> RouteCollection:
    """Resolve an import string to a compiled RouteCollection.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"routes"`` (e.g. ``"myapp"`` resolves to
    ``myapp.routes``).

    The attribute may be a ``RouteCollection``, a root ``Group`` (compiled
    here), or a zero-argument factory returning either.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a collection or group.
        ConfigurationError: If compiling a root group fails.

    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "routes"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    # Support factory functions
    if callable(obj) and not isinstance(obj, RouteCollection | Group):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, Group):
        return RouteCollection(obj)

    if not isinstance(obj, RouteCollection):
        msg = (
            f"{import_string!r} resolved to {type(obj).__name__}, "
            "not a grove RouteCollection or Group"
        )
        raise TypeError(msg)

    return obj
