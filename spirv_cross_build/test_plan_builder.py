import itertools
import random

import pytest

from .core.models import ArtifactKind, Capability, FlagSet, MacroDef
from .core.tables import (
    CAPABILITY_MACROS,
    CAPABILITY_SOURCES,
    EXCEPTIONS_TO_ASSERTIONS_MACRO,
    FORCE_STL_TYPES_MACRO,
    VISIBILITY_EXPORT_MACRO,
    WINDOWS_EXPORT_MACRO,
)
from .planner.plan_builder import build_plan
from .planner.validator import find_violation

CANONICAL = ["core", "c-api", "glsl", "hlsl", "msl", "cpp", "reflect", "util"]


def _valid_flag_sets():
    """Every capability combination that passes validation."""
    for bits in itertools.product([False, True], repeat=len(Capability)):
        flags = FlagSet(**{cap.value: bit for cap, bit in zip(Capability, bits)})
        if find_violation(flags) is None:
            yield flags


# --- Tests for Source groups ---


def test_core_and_c_api_always_first():
    """Test that core and c-api are present even with every capability off."""
    flags = FlagSet(**{cap.value: False for cap in Capability})
    plan = build_plan(flags, None)
    assert plan.group_names() == ("core", "c-api")
    assert plan.source_units() == (
        "spirv_cross.cpp",
        "spirv_parser.cpp",
        "spirv_cross_parsed_ir.cpp",
        "spirv_cfg.cpp",
        "spirv_cross_c.cpp",
    )
    assert plan.macros == ()


def test_full_plan_groups_and_sources():
    """Test groups and sources of the all-enabled plan."""
    plan = build_plan(FlagSet(), None)
    assert list(plan.group_names()) == CANONICAL
    assert plan.source_units()[-6:] == (
        "spirv_glsl.cpp",
        "spirv_hlsl.cpp",
        "spirv_msl.cpp",
        "spirv_cpp.cpp",
        "spirv_reflect.cpp",
        "spirv_cross_util.cpp",
    )
    for group in plan.groups[2:]:
        assert group.sources == CAPABILITY_SOURCES[group.capability]
        assert group.macro == CAPABILITY_MACROS[group.capability]


@pytest.mark.parametrize("flags", list(_valid_flag_sets()))
def test_groups_follow_canonical_order(flags):
    """Test canonical group order and uniqueness for every valid flag set."""
    plan = build_plan(flags, None)
    expected = ["core", "c-api"] + [cap.value for cap in flags.enabled_capabilities()]
    assert list(plan.group_names()) == expected
    units = plan.source_units()
    assert len(units) == len(set(units))
    assert len(plan.macros) == len(set(plan.macros))


def test_order_invariant_under_flag_permutation():
    """Test that keyword order never changes the plan."""
    values = {"glsl": True, "hlsl": False, "msl": True, "cpp": True, "reflect": False, "util": True}
    keys = list(values)
    plans = set()
    rng = random.Random(7)
    for _ in range(10):
        rng.shuffle(keys)
        flags = FlagSet(**{k: values[k] for k in keys})
        plans.add(build_plan(flags, None).to_json())
    assert len(plans) == 1


def test_build_plan_is_idempotent():
    """Test that the same inputs give byte-identical plans."""
    flags = FlagSet(artifact_kind=ArtifactKind.SHARED, use_standard_container_types=True)
    first = build_plan(flags, VISIBILITY_EXPORT_MACRO)
    second = build_plan(flags, VISIBILITY_EXPORT_MACRO)
    assert first == second
    assert first.to_json().encode() == second.to_json().encode()


# --- Tests for Macros ---


def test_macro_order_for_all_options():
    """Test macro order with every optional macro present."""
    flags = FlagSet(
        artifact_kind=ArtifactKind.SHARED,
        use_standard_container_types=True,
        exceptions_as_assertions=True,
        msl=False,
    )
    plan = build_plan(flags, WINDOWS_EXPORT_MACRO)
    assert [m.name for m in plan.macros] == [
        "SPIRV_CROSS_C_API_GLSL",
        "SPIRV_CROSS_C_API_HLSL",
        "SPIRV_CROSS_C_API_CPP",
        "SPIRV_CROSS_C_API_REFLECT",
        "SPIRV_CROSS_FORCE_STL_TYPES",
        "SPVC_PUBLIC_API",
        "SPIRV_CROSS_EXCEPTIONS_TO_ASSERTIONS",
    ]
    assert plan.macros[-2] == WINDOWS_EXPORT_MACRO


def test_util_has_no_presence_macro():
    """Test that util contributes sources but no macro."""
    flags = FlagSet(**{cap.value: cap == Capability.UTIL for cap in Capability})
    plan = build_plan(flags, None)
    assert plan.group_names() == ("core", "c-api", "util")
    assert plan.macros == ()


def test_assertions_macro_only_when_requested():
    """Test that the assertions macro appears only on request, last."""
    assert EXCEPTIONS_TO_ASSERTIONS_MACRO not in build_plan(FlagSet(), None).macros
    plan = build_plan(FlagSet(exceptions_as_assertions=True), None)
    assert plan.macros[-1] == EXCEPTIONS_TO_ASSERTIONS_MACRO


def test_stl_macro_only_when_requested():
    """Test that the STL macro appears only on request."""
    assert FORCE_STL_TYPES_MACRO not in build_plan(FlagSet(), None).macros
    assert FORCE_STL_TYPES_MACRO in build_plan(
        FlagSet(use_standard_container_types=True), None
    ).macros


def test_export_macro_passed_through():
    """Test that the export macro is used as given."""
    custom = MacroDef(name="SPVC_PUBLIC_API", value="EXPORTED")
    plan = build_plan(FlagSet(), custom)
    assert plan.macros[-1] == custom


# --- Tests for Artifact ---


def test_artifact_descriptor():
    """Test the artifact descriptor, include paths and libc++ linkage."""
    plan = build_plan(FlagSet(artifact_kind=ArtifactKind.SHARED), None)
    assert plan.artifact.kind == ArtifactKind.SHARED
    assert plan.artifact.name == "spirv-cross"
    assert plan.include_paths == (".",)
    assert plan.link_libcpp


def test_custom_artifact_name():
    """Test that a custom artifact name is kept."""
    plan = build_plan(FlagSet(), None, artifact_name="spirv-cross-c-shared")
    assert plan.artifact.name == "spirv-cross-c-shared"


def test_glsl_hlsl_release_static_scenario():
    """Test a static GLSL plus HLSL plan end to end."""
    flags = FlagSet(glsl=True, hlsl=True, msl=False, cpp=False, reflect=False, util=False)
    plan = build_plan(flags, None)
    assert plan.group_names() == ("core", "c-api", "glsl", "hlsl")
    assert [m.render() for m in plan.macros] == [
        "-DSPIRV_CROSS_C_API_GLSL=1",
        "-DSPIRV_CROSS_C_API_HLSL=1",
    ]
