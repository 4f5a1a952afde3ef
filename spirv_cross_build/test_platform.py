import pytest

from .core.models import ArtifactKind
from .core.tables import VISIBILITY_EXPORT_MACRO, WINDOWS_EXPORT_MACRO
from .planner.platform import (
    export_macro_for,
    host_platform,
    is_macos,
    is_windows_family,
)

PLATFORMS = ["windows", "Win32", "mingw64", "cygwin", "linux", "macos", "freebsd", "wasi", "haiku"]


# --- Tests for export_macro_for ---


@pytest.mark.parametrize("platform_tag", PLATFORMS)
def test_static_has_no_export_macro(platform_tag):
    """Test that static builds never get an export macro."""
    assert export_macro_for(platform_tag, ArtifactKind.STATIC) is None


@pytest.mark.parametrize("platform_tag", ["windows", "WINDOWS", "win32", "win64", "mingw", "msys"])
def test_shared_windows_family_uses_dllexport(platform_tag):
    """Test that shared Windows-family builds use dllexport."""
    macro = export_macro_for(platform_tag, ArtifactKind.SHARED)
    assert macro == WINDOWS_EXPORT_MACRO
    assert macro.render() == "-DSPVC_PUBLIC_API=__declspec(dllexport)"


@pytest.mark.parametrize("platform_tag", ["linux", "macos", "darwin", "freebsd", "wasi", "not-an-os"])
def test_shared_other_platforms_use_visibility(platform_tag):
    """Test that other shared builds use the visibility attribute."""
    macro = export_macro_for(platform_tag, ArtifactKind.SHARED)
    assert macro == VISIBILITY_EXPORT_MACRO
    assert macro.value == '__attribute__((visibility("default")))'


# --- Tests for platform tags ---


def test_is_windows_family():
    """Test the Windows-family check."""
    assert is_windows_family(" Windows ")
    assert not is_windows_family("linux")
    assert not is_windows_family("")


def test_is_macos():
    """Test the macOS check."""
    assert is_macos("Darwin")
    assert is_macos("macos")
    assert not is_macos("ios")


def test_host_platform(monkeypatch):
    """Test host platform detection."""
    monkeypatch.setattr("platform.system", lambda: "Linux")
    assert host_platform() == "linux"
    monkeypatch.setattr("platform.system", lambda: "")
    assert host_platform() == "unknown"
