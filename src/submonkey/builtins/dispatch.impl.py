"""submonkey.builtins.dispatch -- DispatchTable implementation."""

import submonkey
from submonkey.dispatch import DispatchTable


@submonkey.impl(DispatchTable.resolve)
def resolve(self: DispatchTable, cls: type, name: str):
    for klass in cls.__mro__:
        if name in klass.__dict__:
            return klass, klass.__dict__[name]
    return None


@submonkey.impl(DispatchTable.owns)
def owns(self: DispatchTable, cls: type, name: str) -> bool:
    return name in cls.__dict__


@submonkey.impl(DispatchTable.install)
def install(self: DispatchTable, cls: type, name: str, implementation) -> None:
    setattr(cls, name, implementation)


@submonkey.impl(DispatchTable.remove)
def remove(self: DispatchTable, cls: type, name: str) -> bool:
    if name not in cls.__dict__:
        return False
    delattr(cls, name)
    return True
