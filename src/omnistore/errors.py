# SPDX-License-Identifier: MIT
"""Exceptions raised by omnistore itself.

Everything else (network, auth, not-found on delete) is raised by the
backend SDKs and reaches the caller unchanged.
"""


class BackendNotInitializedError(RuntimeError):
    """An operation needed a backend client that was never connected."""

    def __init__(self, backend_name: str) -> None:
        super().__init__(f"{backend_name} is not initialized!")
        self.backend_name = backend_name
