"""murmur: merge a changing set of asynchronous sources into one stream.

Items come out in the order they become ready. Sources can be added at
any time, including while the merged stream is being consumed, and a
source is only polled again after it has signalled progress.

Basic usage::

    from murmur import select_all

    mux = select_all([ticker("a"), ticker("b")])
    mux.push(ticker("c"))

    async for item in mux:
        print(item)

Driving by hand::

    from murmur import Context, SelectAll, Waker

    mux = SelectAll()
    mux.push(source)
    result = mux.poll_next(Context(Waker(on_wake)))
"""

__version__ = "0.1.0-dev"
__all__ = [
    "COMPLETED",
    "EMPTY",
    "EXHAUSTED",
    "NOOP_WAKER",
    "PENDING",
    "AsyncIterSource",
    "Channel",
    "ChannelClosedError",
    "Completed",
    "ConfigurationError",
    "Context",
    "Empty",
    "Exhausted",
    "Failed",
    "IterSource",
    "Item",
    "ItemReady",
    "MergedStream",
    "MurmurError",
    "MuxConfig",
    "NestedSource",
    "Pending",
    "PendingSet",
    "PendingUnit",
    "PullNext",
    "Pulled",
    "Ready",
    "SelectAll",
    "Source",
    "StalledError",
    "UnitState",
    "Waker",
    "as_source",
    "collect",
    "select_all",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "COMPLETED": "murmur.poll",
    "EMPTY": "murmur.poll",
    "EXHAUSTED": "murmur.poll",
    "PENDING": "murmur.poll",
    "Completed": "murmur.poll",
    "Empty": "murmur.poll",
    "Exhausted": "murmur.poll",
    "Failed": "murmur.poll",
    "Item": "murmur.poll",
    "ItemReady": "murmur.poll",
    "Pending": "murmur.poll",
    "Pulled": "murmur.poll",
    "Ready": "murmur.poll",
    "NOOP_WAKER": "murmur.task",
    "Context": "murmur.task",
    "Waker": "murmur.task",
    "PendingSet": "murmur.pending",
    "PendingUnit": "murmur.pending",
    "UnitState": "murmur.pending",
    "AsyncIterSource": "murmur.sources",
    "IterSource": "murmur.sources",
    "Source": "murmur.sources",
    "as_source": "murmur.sources",
    "Channel": "murmur.channel",
    "NestedSource": "murmur.select",
    "PullNext": "murmur.select",
    "SelectAll": "murmur.select",
    "select_all": "murmur.select",
    "MergedStream": "murmur.drive",
    "collect": "murmur.drive",
    "MuxConfig": "murmur.config",
    "ChannelClosedError": "murmur.errors",
    "ConfigurationError": "murmur.errors",
    "MurmurError": "murmur.errors",
    "StalledError": "murmur.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import murmur`` cheap (no anyio import) while providing a
    clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
