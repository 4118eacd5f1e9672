"""Config Record model."""

from __future__ import annotations

from pydantic import BaseModel


class ConfigRecord(BaseModel):
    """The ``local`` / ``remote`` bindings stored in ``psync_config``.

    An empty string means the binding is not set.
    """

    local: str = ""
    remote: str = ""
