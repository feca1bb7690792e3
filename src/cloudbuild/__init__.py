"""Cloud Build iOS credential client public surface."""

from cloudbuild.client import DEFAULT_API_BASE, CredentialsService
from cloudbuild.credentials import IOSCertificate, IOSCredential, ProvisioningProfile
from cloudbuild.errors import (
    CloudBuildError,
    CredentialFileError,
    RemoteError,
    ResponseSchemaError,
    ServiceRequestError,
    ServiceUnavailableError,
)

__all__ = [
    "CloudBuildError",
    "CredentialFileError",
    "CredentialsService",
    "DEFAULT_API_BASE",
    "IOSCertificate",
    "IOSCredential",
    "ProvisioningProfile",
    "RemoteError",
    "ResponseSchemaError",
    "ServiceRequestError",
    "ServiceUnavailableError",
]
