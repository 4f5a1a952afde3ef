from unittest.mock import AsyncMock, MagicMock

import pytest

from .core.errors import ConstraintViolation
from .core.models import (
    ArtifactKind,
    BuildMode,
    BuildTarget,
    Capability,
    FlagSet,
    OptimizeMode,
)
from .emitters.base import ArtifactEmitter, EmitResult
from .planner.orchestrator import BuildPlanner, plan_build

LINUX = BuildTarget(os="linux")
WINDOWS = BuildTarget(os="windows", optimize=OptimizeMode.RELEASE_FAST)


# --- Fixtures ---


@pytest.fixture
def planner():
    """Planner under test."""
    return BuildPlanner()


@pytest.fixture
def mock_emitter():
    """An emitter whose emit is an AsyncMock."""
    emitter = MagicMock(spec=ArtifactEmitter)
    emitter.emit = AsyncMock(return_value=EmitResult(success=True, artifact="out"))
    return emitter


# --- Tests for BuildPlanner.plan ---


def test_release_static_glsl_hlsl_scenario(planner):
    """Test the full recipe for a release static GLSL plus HLSL build."""
    flags = FlagSet(
        build_mode=BuildMode.RELEASE,
        artifact_kind=ArtifactKind.STATIC,
        glsl=True,
        hlsl=True,
        msl=False,
        cpp=False,
        reflect=False,
        util=False,
    )
    recipe = planner.plan(flags, LINUX)

    assert recipe.plan.group_names() == ("core", "c-api", "glsl", "hlsl")
    assert [m.name for m in recipe.plan.macros] == [
        "SPIRV_CROSS_C_API_GLSL",
        "SPIRV_CROSS_C_API_HLSL",
    ]
    assert recipe.toolchain_flags == (
        "-g0",
        "-std=c++11",
        "-Wall",
        "-Wextra",
        "-Wshadow",
        "-Wno-deprecated-declarations",
    )
    assert all(m.name != "SPVC_PUBLIC_API" for m in recipe.plan.macros)
    assert recipe.target == LINUX


def test_violation_stops_before_planning(planner, monkeypatch):
    """Test that a violation stops the pipeline before the plan is built."""
    build_plan = MagicMock()
    monkeypatch.setattr("spirv_cross_build.planner.orchestrator.build_plan", build_plan)

    with pytest.raises(ConstraintViolation) as excinfo:
        planner.plan(FlagSet(glsl=False, hlsl=True), LINUX)

    assert excinfo.value.dependent == Capability.HLSL
    assert excinfo.value.prerequisite == Capability.GLSL
    build_plan.assert_not_called()


def test_shared_windows_recipe(planner):
    """Test the recipe for a shared Windows build."""
    flags = FlagSet(artifact_kind=ArtifactKind.SHARED, exceptions_as_assertions=True)
    recipe = planner.plan(flags, WINDOWS)

    assert recipe.plan.macros[-2].render() == "-DSPVC_PUBLIC_API=__declspec(dllexport)"
    assert recipe.plan.macros[-1].name == "SPIRV_CROSS_EXCEPTIONS_TO_ASSERTIONS"
    assert recipe.toolchain_flags[-1] == "-fno-exceptions"
    assert recipe.target.optimize == OptimizeMode.RELEASE_FAST


def test_plan_defaults_to_host_target(planner, monkeypatch):
    """Test that plan uses the host target when none is given."""
    monkeypatch.setattr("platform.system", lambda: "Linux")
    recipe = planner.plan(FlagSet(artifact_kind=ArtifactKind.SHARED))
    assert recipe.target.os == "linux"
    assert recipe.plan.macros[-1].value == '__attribute__((visibility("default")))'


def test_plan_is_deterministic():
    """Test that planning twice gives identical JSON."""
    flags = FlagSet(msl=False, use_standard_container_types=True)
    assert plan_build(flags, LINUX).to_json() == plan_build(flags, LINUX).to_json()


def test_recipe_json_roundtrip_shape():
    """Test the JSON shape of a recipe."""
    recipe = plan_build(FlagSet(), LINUX)
    data = recipe.to_dict()
    assert data["plan"]["artifact"] == {"kind": "static", "name": "spirv-cross"}
    assert data["plan"]["groups"][0]["name"] == "core"
    assert data["target"] == {"os": "linux", "optimize": "Debug"}


# --- Tests for BuildPlanner.execute ---


@pytest.mark.asyncio
async def test_execute_hands_recipe_to_emitter(planner, mock_emitter):
    """Test that execute passes the recipe to the emitter."""
    result = await planner.execute(FlagSet(), mock_emitter, LINUX)

    assert result.success
    mock_emitter.emit.assert_awaited_once()
    recipe = mock_emitter.emit.await_args.args[0]
    assert recipe == planner.plan(FlagSet(), LINUX)


@pytest.mark.asyncio
async def test_execute_never_calls_emitter_on_violation(planner, mock_emitter):
    """Test that execute never reaches the emitter on a violation."""
    with pytest.raises(ConstraintViolation):
        await planner.execute(FlagSet(glsl=False, reflect=True), mock_emitter, LINUX)
    mock_emitter.emit.assert_not_awaited()


def test_custom_artifact_name():
    """Test that the planner's artifact name reaches the plan."""
    recipe = BuildPlanner(artifact_name="spirv-cross-c").plan(FlagSet(), LINUX)
    assert recipe.plan.artifact.name == "spirv-cross-c"
