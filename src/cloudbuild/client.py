"""Typed client for the Cloud Build iOS signing credential endpoints."""

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

import requests
from pydantic import ValidationError

from cloudbuild.credentials import IOSCredential
from cloudbuild.errors import (
    CredentialFileError,
    ResponseSchemaError,
    ServiceRequestError,
    ServiceUnavailableError,
)

DEFAULT_API_BASE = "https://build-api.cloud.unity3d.com/api/v1"

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    return quote(value, safe="")


def _error_detail(body: object) -> object | None:
    if not isinstance(body, dict):
        return None
    for key in ("error", "message", "detail"):
        value = body.get(key)
        if isinstance(value, list) and value:
            return "; ".join(str(item) for item in value)
        if value:
            return value
    return None


def _request_error(response) -> ServiceRequestError:
    try:
        body: object | None = response.json()
    except ValueError:
        body = None
    detail = _error_detail(body)
    if isinstance(detail, str):
        message = f"cloud build request failed: {response.status_code} {detail}"
    else:
        message = f"cloud build request failed: {response.status_code} {response.text}"
    return ServiceRequestError(
        message,
        status_code=response.status_code,
        detail=detail,
        body=body,
    )


def _json(response) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise ResponseSchemaError("response body is not valid JSON") from exc


def _parse_credential(payload: object) -> IOSCredential:
    try:
        return IOSCredential.model_validate(payload)
    except ValidationError as exc:
        raise ResponseSchemaError(f"unexpected credential payload: {exc}") from exc


def _open_credential_file(stack: contextlib.ExitStack, path: str) -> tuple[str, object]:
    file_path = Path(path).expanduser()
    try:
        handle = stack.enter_context(file_path.open("rb"))
    except OSError as exc:
        raise CredentialFileError(f"cannot read {file_path}: {exc.strerror or exc}") from exc
    return file_path.name, handle


@dataclass
class CredentialsService:
    """iOS credential CRUD scoped to one API key and organization."""

    api_key: str
    org_id: str
    base_url: str = DEFAULT_API_BASE
    timeout: float = 30.0

    def __post_init__(self) -> None:
        self._session = requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _ios_path(self, project_id: str, credential_id: str | None = None) -> str:
        path = (
            f"/orgs/{_segment(self.org_id)}/projects/{_segment(project_id)}"
            "/credentials/signing/ios"
        )
        if credential_id is not None:
            path = f"{path}/{_segment(credential_id)}"
        return path

    def _request(
        self,
        method: str,
        path: str,
        *,
        data: dict | None = None,
        files: dict | None = None,
    ):
        url = self._url(path)
        headers = {"Authorization": f"Basic {self.api_key}"}
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                data=data,
                files=files,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ServiceUnavailableError(str(exc)) from exc
        logger.debug("%s %s -> %s", method, url, response.status_code)

        if response.status_code >= 400:
            raise _request_error(response)
        return response

    def _send_credential(
        self,
        method: str,
        path: str,
        *,
        label: str,
        cert_path: str,
        profile_path: str,
        cert_pass: str,
    ) -> IOSCredential:
        data = {"label": label, "certificatePass": cert_pass}
        with contextlib.ExitStack() as stack:
            files = {
                "fileCertificate": _open_credential_file(stack, cert_path),
                "fileProvisioningProfile": _open_credential_file(stack, profile_path),
            }
            response = self._request(method, path, data=data, files=files)
        return _parse_credential(_json(response))

    def get_ios(self, project_id: str, credential_id: str) -> IOSCredential:
        response = self._request("GET", self._ios_path(project_id, credential_id))
        return _parse_credential(_json(response))

    def get_all_ios(self, project_id: str) -> list[IOSCredential]:
        payload = _json(self._request("GET", self._ios_path(project_id)))
        if not isinstance(payload, list):
            raise ResponseSchemaError("expected a list of credentials")
        return [_parse_credential(item) for item in payload]

    def update_ios(
        self,
        project_id: str,
        credential_id: str,
        label: str,
        cert_path: str,
        profile_path: str,
        cert_pass: str,
    ) -> IOSCredential:
        return self._send_credential(
            "PUT",
            self._ios_path(project_id, credential_id),
            label=label,
            cert_path=cert_path,
            profile_path=profile_path,
            cert_pass=cert_pass,
        )

    def upload_ios(
        self,
        project_id: str,
        label: str,
        cert_path: str,
        profile_path: str,
        cert_pass: str,
    ) -> IOSCredential:
        return self._send_credential(
            "POST",
            self._ios_path(project_id),
            label=label,
            cert_path=cert_path,
            profile_path=profile_path,
            cert_pass=cert_pass,
        )

    def delete_ios(self, project_id: str, credential_id: str) -> str:
        response = self._request("DELETE", self._ios_path(project_id, credential_id))
        return f"{response.status_code} {response.reason or ''}".strip()


__all__ = ["CredentialsService", "DEFAULT_API_BASE"]
