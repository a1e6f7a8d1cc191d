"""Catalog store exceptions."""


class LocalStoreError(Exception):
    """
    Writing a menu item's availability to the catalog failed.

    remote_applied is True when the delivery platform already accepted the
    change, i.e. local and remote state now disagree.
    """

    def __init__(
        self,
        message: str,
        external_id: str | None = None,
        remote_applied: bool = False,
    ) -> None:
        self.message = message
        self.external_id = external_id
        self.remote_applied = remote_applied
        super().__init__(message)
