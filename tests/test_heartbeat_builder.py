"""
Heartbeat builder: fields, placeholder entity, clock, identity
"""

from __future__ import annotations

import dataclasses
import os

import pytest

from wakapi_core.heartbeat import HeartbeatBuilder, detect_os_family, resolve_scene_entity

from conftest import StubBranches


def test_empty_path_maps_to_unsaved_scene(builder) -> None:
    assert builder.build("", False).entity == "Unsaved Scene"
    assert builder.build(None, False).entity == "Unsaved Scene"


def test_fields_from_context(builder) -> None:
    hb = builder.build("/proj/Assets/Main.unity", is_save=True)

    assert hb.to_dict() == {
        "entity": "/proj/Assets/Main.unity",
        "type": "app",
        "category": None,
        "project": "Demo",
        "branch": "main",
        "language": "Unity",
        "is_write": True,
        "editor": "Unity",
        "operating_system": "Linux",
        "machine": "devbox",
        "time": 1000,
    }


def test_is_write_only_for_saves(builder) -> None:
    assert builder.build("/a", False).is_write is False


def test_heartbeat_is_immutable(builder) -> None:
    hb = builder.build("/a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        hb.entity = "/b"  # type: ignore[misc]


def test_time_is_integer_seconds(builder, clock) -> None:
    clock.now = 1234.9
    assert builder.build("/a").time == 1234


def test_time_never_goes_backwards(builder, clock) -> None:
    first = builder.build("/a").time
    clock.advance(-30)
    second = builder.build("/a").time
    clock.advance(100)
    third = builder.build("/a").time

    assert first <= second <= third
    assert third == 1070


def test_branch_resolved_on_every_build(settings, clock) -> None:
    branches = StubBranches("feature/x")
    builder = HeartbeatBuilder(settings, branches, clock=clock, os_name="Windows-10", machine="pc")

    assert builder.build("/a").branch == "feature/x"
    builder.build("/a")
    assert branches.calls == 2


def test_project_read_at_build_time(builder, settings) -> None:
    settings.active_project = "Other"
    assert builder.build("/a").project == "Other"


@pytest.mark.parametrize(
    "os_name, family",
    [
        ("Windows-10-10.0.19045-SP0", "Windows"),
        ("Linux-6.1.0-x86_64-with-glibc2.36", "Linux"),
        ("macOS-14.2-arm64-arm-64bit", "MacOSX"),
        ("Darwin-23.2.0-arm64", "MacOSX"),
        ("Mac OS X 10.15.7", "MacOSX"),
        ("FreeBSD-14.0-RELEASE", "Other"),
        ("", "Other"),
    ],
)
def test_detect_os_family(os_name: str, family: str) -> None:
    assert detect_os_family(os_name) == family


def test_resolve_scene_entity_strips_assets_prefix(tmp_path) -> None:
    data_path = str(tmp_path / "Game" / "Assets")
    assert resolve_scene_entity("Assets/Scenes/Main.unity", data_path) == os.path.join(
        data_path, "Scenes/Main.unity"
    )


def test_resolve_scene_entity_empty_and_absolute(tmp_path) -> None:
    data_path = str(tmp_path / "Game" / "Assets")
    absolute = str(tmp_path / "elsewhere.unity")

    assert resolve_scene_entity("", data_path) == ""
    assert resolve_scene_entity(None, data_path) == ""
    assert resolve_scene_entity(absolute, data_path) == absolute


def test_resolve_scene_entity_outside_assets(tmp_path) -> None:
    data_path = str(tmp_path / "Game" / "Assets")
    assert resolve_scene_entity("Packages/x.unity", data_path) == os.path.join(
        str(tmp_path / "Game"), "Packages/x.unity"
    )
