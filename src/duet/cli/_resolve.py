"""Layout import resolution — ``"module:attribute"`` strings to layouts.

Shared by ``duet routes`` and ``duet call``.
"""

import importlib

from duet.api.layout import Alt, Layout, Leaf, Segment
from duet.app import App


def resolve_layout(import_string: str) -> Layout:
    """Resolve an import string to a layout.

    Accepts ``"module:attribute"``. When the attribute is omitted it
    defaults to ``"api"``. The attribute may be a layout, an ``App``
    (its layout is used), or a zero-argument factory returning either.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a layout or App.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "api"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, (App, Leaf, Segment, Alt)):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, App):
        return obj.layout
    if isinstance(obj, (Leaf, Segment, Alt)):
        return obj

    msg = f"{import_string!r} resolved to {type(obj).__name__}, not a duet layout or App"
    raise TypeError(msg)
