from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from pylenient.domain.interfaces import IFileHandle
from pylenient.domain.models import ConverterSet
from pylenient.lenient.streams import TransactionalWriteStream, TransformReadStream

_ORIGINAL_ATTR = "_original_file"


class ForwardingObject:
    """Attribute bag of bound methods; shares no ancestry with what it forwards to."""

    def __repr__(self) -> str:
        original = self.__dict__.get(_ORIGINAL_ATTR)
        return f"<ForwardingObject for {original!r}>"


def _public_names(obj: Any) -> list[str]:
    names = list(getattr(obj, "__dict__", {}))
    for klass in type(obj).__mro__:
        if klass is object:
            break
        names.extend(vars(klass))
    return list(dict.fromkeys(n for n in names if not n.startswith("_")))


def new_forwarding_object(obj: Any) -> ForwardingObject:
    """
    Poor man's facade: copy every public method of `obj`, bound to `obj`.

    Subclassing (or wrapping in something that passes isinstance checks) is
    not an option: the editor recognises its own file class and reads straight
    from disk instead of calling `create_read_stream`.
    """
    forward = ForwardingObject()
    for name in _public_names(obj):
        if isinstance(inspect.getattr_static(obj, name, None), property):
            continue
        attr = getattr(obj, name, None)
        if callable(attr) and not isinstance(attr, type):
            setattr(forward, name, attr)
    return forward


def get_mapped_file(
    file: IFileHandle,
    converters: ConverterSet,
    *,
    on_error: Callable[[Exception], None],
    on_success: Callable[[], None] | None = None,
) -> IFileHandle:
    """Wrap `file` so reads come out lenient and writes go back to disk canonical."""
    mapped = new_forwarding_object(file)
    mapped.create_read_stream = lambda: TransformReadStream(  # type: ignore[attr-defined]
        file.create_read_stream(), converters.to_lenient
    )
    mapped.create_write_stream = lambda: TransactionalWriteStream(  # type: ignore[attr-defined]
        file, converters.to_canonical, on_error=on_error, on_success=on_success
    )
    setattr(mapped, _ORIGINAL_ATTR, file)
    return mapped  # type: ignore[return-value]


def is_mapped_file(file: Any) -> bool:
    return isinstance(file, ForwardingObject) and _ORIGINAL_ATTR in file.__dict__


def get_original_file(file: Any) -> Any:
    """The handle a mapped file wraps; any other handle is returned unchanged."""
    if is_mapped_file(file):
        return file.__dict__[_ORIGINAL_ATTR]
    return file
