from __future__ import annotations

import argparse

import pytest

from cloudbuild.cli.flags import Flag, FlagSchema, SchemaError, create_flag_set


def test_redeclare_overwrites_and_keeps_position() -> None:
    schema = FlagSchema("demo")
    schema.declare("projectId", "", "Project Id")
    schema.declare("credId", "", "Credential Id")
    schema.declare("projectId", "p-default", "Project identifier")

    assert schema.names() == ["projectId", "credId"]
    assert schema.get("projectId") == Flag("projectId", "p-default", "Project identifier")
    assert len(schema) == 2


def test_empty_schema_is_legal() -> None:
    schema = FlagSchema("empty")
    assert schema.names() == []
    assert list(schema.flags()) == []


def test_create_flag_set_declares_auth_flags() -> None:
    schema = create_flag_set("listCreds")
    assert schema.command == "listCreds"
    assert schema.names() == ["apiKey", "orgId"]


def test_unknown_flag_lookup_raises_schema_error() -> None:
    schema = create_flag_set("listCreds")
    with pytest.raises(SchemaError, match="certPath"):
        schema.get("certPath")


def test_bind_only_reports_supplied_flags() -> None:
    schema = create_flag_set("getCred")
    schema.declare("projectId", "", "Project Id")
    schema.declare("credId", "", "Credential Id")
    parser = schema.bind(argparse.ArgumentParser())

    args = parser.parse_args(["--projectId=proj-1", "--credId", "Cred-2"])

    assert schema.extract(args) == {"projectId": "proj-1", "credId": "Cred-2"}


def test_declared_default_is_not_a_supplied_value() -> None:
    schema = FlagSchema("demo")
    schema.declare("label", "release", "Label")
    parser = schema.bind(argparse.ArgumentParser())

    args = parser.parse_args([])

    assert schema.extract(args) == {}
    assert "(default: release)" in parser.format_help()


def test_extract_ignores_unrelated_namespace_entries() -> None:
    schema = create_flag_set("demo")
    namespace = argparse.Namespace(command="demo", json=True, orgId="org")
    assert schema.extract(namespace) == {"orgId": "org"}


def test_empty_flag_value_is_not_supplied() -> None:
    schema = create_flag_set("listCreds")
    schema.declare("projectId", "", "Project Id")
    namespace = argparse.Namespace(apiKey="", orgId="Org", projectId="")
    assert schema.extract(namespace) == {"orgId": "Org"}
