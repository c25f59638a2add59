from __future__ import annotations

import click


def get_store(ctx: click.Context):
    """Return the configured store, opening it on first use.

    Commands that never touch history (init, review --no-save) therefore
    never create a database file.
    """
    if "store" not in ctx.obj:
        store = ctx.obj["store_factory"]()
        ctx.obj["store"] = store
        ctx.find_root().call_on_close(store.close)
    return ctx.obj["store"]
