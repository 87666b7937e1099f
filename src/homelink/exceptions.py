"""Error taxonomy shared by the store and control-plane layers."""

from __future__ import annotations


class HomelinkError(Exception):
    pass


class StoreError(HomelinkError):
    """The document store could not be read."""


class ControlPlaneError(HomelinkError):
    """A device control plane could not be reached or refused the request."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class PayloadError(ControlPlaneError):
    """A control plane answered with a payload of unexpected shape."""
