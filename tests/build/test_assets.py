"""Tests for AssetStager."""

import logging

import pytest

from src.build import AssetStager
from src.errors import ResourceNotFoundError, UnsafePathError
from src.models import BuildSettings, ClassNode, MetadataKind
from tests.conftest import make_program


@pytest.fixture
def asset_program():
    clazz = ClassNode(
        name="app.Main",
        metadata={MetadataKind.ADD_ASSETS: [["img/logo.png", "data.txt"]]},
    )
    return make_program([clazz], resources={"img/logo.png": b"PNG", "data.txt": b"hello"})


def _snapshot(root):
    return {
        str(p.relative_to(root)): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()
    }


def test_no_staging_dir_is_noop(asset_program):
    """Without a staging directory nothing is written and nothing fails."""
    assert AssetStager(None).stage(asset_program, BuildSettings()) == []


def test_embedded_resources_are_copied(tmp_path, asset_program):
    """ADD_ASSETS resources land under the staging directory."""
    staging = tmp_path / "staging"

    AssetStager(staging).stage(asset_program, BuildSettings())

    assert (staging / "img" / "logo.png").read_bytes() == b"PNG"
    assert (staging / "data.txt").read_bytes() == b"hello"


def test_asset_trees_are_copied_wholesale(tmp_path, asset_program):
    """Every file of a settings asset tree is copied, keeping its layout."""
    tree = tmp_path / "assets"
    (tree / "sounds").mkdir(parents=True)
    (tree / "sounds" / "beep.wav").write_bytes(b"WAV")
    (tree / "readme.md").write_text("docs")
    staging = tmp_path / "staging"

    AssetStager(staging).stage(asset_program, BuildSettings(assets=[tree]))

    assert (staging / "sounds" / "beep.wav").read_bytes() == b"WAV"
    assert (staging / "readme.md").read_text() == "docs"


def test_staging_is_idempotent(tmp_path, asset_program):
    """Staging the same inputs twice yields the same contents."""
    tree = tmp_path / "assets"
    tree.mkdir()
    (tree / "a.txt").write_text("a")
    staging = tmp_path / "staging"
    stager = AssetStager(staging)
    settings = BuildSettings(assets=[tree])

    stager.stage(asset_program, settings)
    first = _snapshot(staging)
    stager.stage(asset_program, settings)

    assert _snapshot(staging) == first


def test_conflicting_sources_warn_and_last_wins(tmp_path, asset_program, caplog):
    """A tree file overwriting an embedded resource logs a warning."""
    tree = tmp_path / "assets"
    tree.mkdir()
    (tree / "data.txt").write_text("from tree")
    staging = tmp_path / "staging"

    with caplog.at_level(logging.WARNING):
        AssetStager(staging).stage(asset_program, BuildSettings(assets=[tree]))

    assert (staging / "data.txt").read_text() == "from tree"
    assert any("overwrites" in r.message for r in caplog.records)


def test_restaging_same_sources_does_not_warn(tmp_path, asset_program, caplog):
    """The same source writing the same file twice is not a conflict."""
    stager = AssetStager(tmp_path / "staging")

    with caplog.at_level(logging.WARNING):
        stager.stage(asset_program, BuildSettings())
        stager.stage(asset_program, BuildSettings())

    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_missing_resource_raises(tmp_path):
    """An unknown resource path is an error."""
    """An asset missing from the resource store is an error."""
    clazz = ClassNode(name="app.Main", metadata={MetadataKind.ADD_ASSETS: ["nope.png"]})

    with pytest.raises(ResourceNotFoundError, match="nope.png"):
        AssetStager(tmp_path / "staging").stage(make_program([clazz]), BuildSettings())


def test_missing_asset_tree_raises(tmp_path, asset_program):
    """A settings asset tree that does not exist is an error."""
    with pytest.raises(ResourceNotFoundError):
        AssetStager(tmp_path / "staging").stage(
            asset_program, BuildSettings(assets=[tmp_path / "missing"])
        )


@pytest.mark.parametrize("path", ["../escaped.txt", "img/../../escaped.txt"])
def test_asset_path_cannot_leave_staging_dir(tmp_path, path):
    """Asset paths resolving outside the staging directory are rejected."""
    clazz = ClassNode(name="app.Main", metadata={MetadataKind.ADD_ASSETS: [path]})
    program = make_program([clazz], resources={path: b"nope"})

    with pytest.raises(UnsafePathError):
        AssetStager(tmp_path / "staging").stage(program, BuildSettings())

    assert not (tmp_path / "escaped.txt").exists()


def test_leading_slash_stays_inside_staging_dir(tmp_path):
    """A rooted asset path is staged relative to the staging directory."""
    clazz = ClassNode(name="app.Main", metadata={MetadataKind.ADD_ASSETS: ["/img/a.png"]})
    program = make_program([clazz], resources={"/img/a.png": b"A"})
    staging = tmp_path / "staging"

    AssetStager(staging).stage(program, BuildSettings())

    assert (staging / "img" / "a.png").read_bytes() == b"A"
