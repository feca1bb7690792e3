"""iOS signing credential schemas (Cloud Build API v1)."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

IOS_PLATFORM = "ios"


class _CloudBuildModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class IOSCertificate(_CloudBuildModel):
    team_id: Optional[str] = Field(None, alias="teamId")
    cn: Optional[str] = None
    expiration: Optional[str] = None
    certificate_id: Optional[str] = Field(None, alias="certificateId")


class ProvisioningProfile(_CloudBuildModel):
    team_id: Optional[str] = Field(None, alias="teamId")
    bundle_id: Optional[str] = Field(None, alias="bundleId")
    expiration: Optional[str] = None
    is_enterprise_profile: Optional[bool] = Field(None, alias="isEnterpriseProfile")
    type: Optional[str] = None
    num_devices: Optional[int] = Field(None, alias="numDevices", ge=0)


class IOSCredential(_CloudBuildModel):
    credentialid: str
    platform: str = IOS_PLATFORM
    label: Optional[str] = None
    created: Optional[str] = None
    last_mod: Optional[str] = Field(None, alias="lastMod")
    certificate: Optional[IOSCertificate] = None
    provisioning_profile: Optional[ProvisioningProfile] = Field(None, alias="provisioningProfile")
