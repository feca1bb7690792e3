"""Client error types."""

from __future__ import annotations


class CloudBuildError(RuntimeError):
    """Base client error."""


class RemoteError(CloudBuildError):
    """A remote credential operation failed."""


class ServiceUnavailableError(RemoteError):
    """Cloud Build could not be reached."""


class ServiceRequestError(RemoteError):
    """Cloud Build returned an HTTP error response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: object | None = None,
        body: object | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
        self.body = body


class ResponseSchemaError(RemoteError):
    """Response body did not match the expected credential schema."""


class CredentialFileError(CloudBuildError):
    """A local certificate or provisioning profile could not be read."""
