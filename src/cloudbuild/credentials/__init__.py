from cloudbuild.credentials.schemas import (
    IOS_PLATFORM,
    IOSCertificate,
    IOSCredential,
    ProvisioningProfile,
)

__all__ = [
    "IOS_PLATFORM",
    "IOSCertificate",
    "IOSCredential",
    "ProvisioningProfile",
]
