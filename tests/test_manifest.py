"""Tests for admobgen.manifest."""

from __future__ import annotations

import os
from pathlib import PurePosixPath

import pytest

from admobgen.manifest import (
    ANDROID,
    IOS,
    ManifestUpdater,
    MarkerNotFoundError,
    android_entry,
    ios_entry,
    pending_entries,
    render_block,
    scan_android,
    scan_ios,
)
from admobgen.markers import MarkerManager
from tests._fixtures.package_builder import PLUGIN_XML, PackageBuilder

ANDROID_DIR = PurePosixPath("cordova/src/android")
IOS_DIR = PurePosixPath("cordova/src/ios")
MANIFEST = PurePosixPath("cordova/plugin.xml")


def test_android_entry_mirrors_subdirectory() -> None:
    root_entry = android_entry("Foo.java")
    nested_entry = android_entry("bar/Baz.java")
    assert root_entry.platform == ANDROID
    assert root_entry.tag == '        <source-file src="src/android/Foo.java" target-dir="src/admob/plugin" />'
    assert nested_entry.tag == (
        '        <source-file src="src/android/bar/Baz.java" target-dir="src/admob/plugin/bar" />'
    )


def test_ios_entry_is_flat() -> None:
    entry = ios_entry("AMSAdBase.swift")
    assert entry.platform == IOS
    assert str(entry) == '        <source-file src="src/ios/AMSAdBase.swift" />'


def test_scan_android_recurses_and_sorts(package_builder: PackageBuilder) -> None:
    package_builder.write(
        {
            "cordova/src/android/Foo.java": "class Foo {}\n",
            "cordova/src/android/bar/Baz.java": "class Baz {}\n",
            "cordova/src/android/bar/notes.txt": "ignored\n",
            "cordova/src/android/.hidden/Secret.java": "class Secret {}\n",
        }
    )
    entries = scan_android(package_builder.path() / ANDROID_DIR)
    assert render_block(entries) == (
        '        <source-file src="src/android/Foo.java" target-dir="src/admob/plugin" />\n'
        '        <source-file src="src/android/bar/Baz.java" target-dir="src/admob/plugin/bar" />'
    )


def test_scan_ios_ignores_subdirectories(package_builder: PackageBuilder) -> None:
    package_builder.write(
        {
            "cordova/src/ios/AMSPlugin.swift": "",
            "cordova/src/ios/AMSBase.swift": "",
            "cordova/src/ios/nested/Skipped.swift": "",
            "cordova/src/ios/Bridge.m": "",
        }
    )
    entries = scan_ios(package_builder.path() / IOS_DIR)
    assert sorted(entry.tag for entry in entries) == [
        '        <source-file src="src/ios/AMSBase.swift" />',
        '        <source-file src="src/ios/AMSPlugin.swift" />',
    ]


def test_scan_missing_directory_raises(package_builder: PackageBuilder) -> None:
    with pytest.raises(FileNotFoundError):
        scan_android(package_builder.path() / "missing")


def test_update_rewrites_regions(package_builder: PackageBuilder) -> None:
    package_builder.scaffold()
    package_builder.write(
        {
            "cordova/src/android/Foo.java": "class Foo {}\n",
            "cordova/src/android/bar/Baz.java": "class Baz {}\n",
            "cordova/src/ios/AMSPlugin.swift": "",
        }
    )

    outcome = ManifestUpdater().update(package_builder.path(), MANIFEST, ANDROID_DIR, IOS_DIR)

    assert outcome.changed is True
    text = package_builder.read("cordova/plugin.xml")
    assert "Stale" not in text
    assert (
        "        <!-- AUTOGENERATED: ANDROID_BEGIN -->\n"
        '        <source-file src="src/android/Foo.java" target-dir="src/admob/plugin" />\n'
        '        <source-file src="src/android/bar/Baz.java" target-dir="src/admob/plugin/bar" />\n'
        "        <!-- AUTOGENERATED: ANDROID_END -->\n"
        '        <framework src="com.google.android.gms:play-services-ads:22.0.0" />\n'
    ) in text
    assert (
        "        <!-- AUTOGENERATED: IOS_BEGIN -->\n"
        '        <source-file src="src/ios/AMSPlugin.swift" />\n'
        "        <!-- AUTOGENERATED: IOS_END -->\n"
    ) in text
    assert text.startswith("<?xml version='1.0' encoding='utf-8'?>\n")


def test_update_is_idempotent(package_builder: PackageBuilder) -> None:
    package_builder.scaffold()
    package_builder.write({"cordova/src/android/Foo.java": "", "cordova/src/ios/A.swift": ""})
    updater = ManifestUpdater()

    updater.update(package_builder.path(), MANIFEST, ANDROID_DIR, IOS_DIR)
    first = package_builder.read("cordova/plugin.xml")
    second_outcome = updater.update(package_builder.path(), MANIFEST, ANDROID_DIR, IOS_DIR)

    assert second_outcome.changed is False
    assert package_builder.read("cordova/plugin.xml") == first


def test_update_with_no_sources_leaves_empty_regions(package_builder: PackageBuilder) -> None:
    package_builder.scaffold()
    ManifestUpdater().update(package_builder.path(), MANIFEST, ANDROID_DIR, IOS_DIR)

    text = package_builder.read("cordova/plugin.xml")
    blocks = MarkerManager().extract(text, ["ANDROID", "IOS"])
    assert blocks == {"ANDROID": "", "IOS": ""}


def test_update_dry_run_leaves_manifest(package_builder: PackageBuilder) -> None:
    package_builder.scaffold()
    package_builder.write({"cordova/src/android/Foo.java": ""})

    outcome = ManifestUpdater().update(
        package_builder.path(), MANIFEST, ANDROID_DIR, IOS_DIR, dry_run=True
    )

    assert outcome.changed is True
    assert '+        <source-file src="src/android/Foo.java" target-dir="src/admob/plugin" />' in outcome.diff
    assert package_builder.read("cordova/plugin.xml") == PLUGIN_XML


def test_update_without_markers_fails_loudly(package_builder: PackageBuilder) -> None:
    hand_edited = PLUGIN_XML.replace("<!-- AUTOGENERATED: IOS_BEGIN -->", "<!-- ios sources -->")
    package_builder.scaffold(plugin_xml=hand_edited)

    with pytest.raises(MarkerNotFoundError):
        ManifestUpdater().update(package_builder.path(), MANIFEST, ANDROID_DIR, IOS_DIR)

    assert package_builder.read("cordova/plugin.xml") == hand_edited


def test_scan_android_follows_symlinked_directories(package_builder: PackageBuilder) -> None:
    package_builder.write({"shared/ads/Rewarded.java": ""})
    android = package_builder.path() / "cordova/src/android"
    android.mkdir(parents=True)
    try:
        os.symlink(package_builder.path() / "shared/ads", android / "ads", target_is_directory=True)
    except OSError:
        pytest.skip("symlinks are not available on this platform")

    assert scan_android(android) == [android_entry("ads/Rewarded.java")]


def test_pending_entries_follow_scan_rules() -> None:
    android_entries, ios_entries = pending_entries(
        [
            PurePosixPath("cordova/src/android/Generated.java"),
            PurePosixPath("cordova/src/android/ads/Banner.java"),
            PurePosixPath("cordova/src/android/.cache/Hidden.java"),
            PurePosixPath("cordova/src/ios/AMSGenerated.swift"),
            PurePosixPath("cordova/src/ios/nested/Skipped.swift"),
            PurePosixPath("cordova/ts/generated.ts"),
        ],
        ANDROID_DIR,
        IOS_DIR,
    )

    assert android_entries == [android_entry("Generated.java"), android_entry("ads/Banner.java")]
    assert ios_entries == [ios_entry("AMSGenerated.swift")]


def test_update_lists_pending_files_once(package_builder: PackageBuilder) -> None:
    package_builder.scaffold()
    package_builder.write({"cordova/src/android/Generated.java": "// old"})

    outcome = ManifestUpdater().update(
        package_builder.path(),
        MANIFEST,
        ANDROID_DIR,
        IOS_DIR,
        pending=[
            PurePosixPath("cordova/src/android/Generated.java"),
            PurePosixPath("cordova/src/ios/AMSGenerated.swift"),
        ],
        dry_run=True,
    )

    added = [line for line in outcome.diff.splitlines() if line.startswith("+ ")]
    assert added == [
        '+        <source-file src="src/android/Generated.java" target-dir="src/admob/plugin" />',
        '+        <source-file src="src/ios/AMSGenerated.swift" />',
    ]
    assert package_builder.read("cordova/plugin.xml") == PLUGIN_XML
