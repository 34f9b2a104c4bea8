"""submonkey base module - Object base class for component declarations."""

from __future__ import annotations

from forwardpy import Object as _ForwardpyObject


class Object(_ForwardpyObject):
    """submonkey unified base class.

    Every component (gate, registry, dispatch table, hierarchy extender and
    the ``Monkey`` handle) is declared as a subclass with stub methods. The
    behavior lives in ``submonkey/builtins/*.impl.py`` and is attached with
    ``@submonkey.impl``, so any of it can itself be replaced at runtime.
    """

    pass
