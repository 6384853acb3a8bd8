import io

import pytest

from toba.version import (
    BASE_VERSION,
    DEV_SUFFIX,
    BuildInfo,
    is_dev_build,
    normalize_version,
    resolved_version,
    run_version,
)


def expected_dev_version():
    return BASE_VERSION + " " + DEV_SUFFIX


def test_resolved_version_prefers_release_version():
    assert resolved_version("1.0.0", BuildInfo(version="v9.9.9")) == "1.0.0"


def test_resolved_version_uses_build_info_when_release_version_is_missing():
    assert resolved_version("", BuildInfo(version="v1.2.3")) == "1.2.3"


def test_resolved_version_falls_back_to_base_version_dev():
    assert resolved_version("", BuildInfo(version="(devel)")) == expected_dev_version()


def test_resolved_version_treats_local_pseudo_version_as_dev():
    info = BuildInfo(
        version="v0.0.0-20260420100315-3ff11fb608fd",
        settings={"vcs": "git", "vcs.revision": "3ff11fb608fd084747bddac1ab056eb7ba77dab8"},
    )
    assert resolved_version("", info) == expected_dev_version()


def test_resolved_version_treats_dirty_local_pseudo_version_as_dev():
    info = BuildInfo(
        version="v0.0.0-20260420100315-3ff11fb608fd+dirty",
        settings={"vcs": "git", "vcs.modified": "true"},
    )
    assert resolved_version("", info) == expected_dev_version()


def test_resolved_version_treats_dirty_tagged_local_build_as_dev():
    info = BuildInfo(version="v1.0.0+dirty", settings={"vcs": "git", "vcs.modified": "true"})
    assert resolved_version("", info) == expected_dev_version()


def test_resolved_version_keeps_pseudo_version_without_vcs_marker():
    info = BuildInfo(version="v0.0.0-20260420100315-3ff11fb608fd")
    assert resolved_version("", info) == "0.0.0-20260420100315-3ff11fb608fd"


def test_resolved_version_without_build_info_is_dev():
    assert resolved_version("", None) == expected_dev_version()


def test_run_version_writes_resolved_version():
    output = io.StringIO()
    run_version(output, "", None)
    assert output.getvalue() == "toba version: " + expected_dev_version() + "\n"


def test_run_version_writes_release_version():
    output = io.StringIO()
    run_version(output, "1.0.0", None)
    assert output.getvalue() == "toba version: 1.0.0\n"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", ""),
        ("(devel)", ""),
        ("  (devel)  ", ""),
        ("v1.2.3", "1.2.3"),
        (" v1.2.3 ", "1.2.3"),
        ("1.0.0", "1.0.0"),
        ("v", "v"),
        ("vnext", "vnext"),
    ],
)
def test_normalize_version(raw, expected):
    assert normalize_version(raw) == expected


def test_is_dev_build_requires_vcs_marker():
    assert is_dev_build(BuildInfo(version="v1.0.0")) is False
    assert is_dev_build(BuildInfo(version="v1.0.0", settings={"vcs": ""})) is False
    assert is_dev_build(BuildInfo(version="v1.0.0", settings={"vcs": "git"})) is True


def test_is_dev_build_ignores_non_matching_versions():
    info = BuildInfo(version="v1.0.0-rc1", settings={"vcs": "git"})
    assert is_dev_build(info) is False
    assert resolved_version("", info) == "1.0.0-rc1"