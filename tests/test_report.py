import pytest

from pixelrunner.toolchain.compiler import Language
from pixelrunner.toolchain.report import (
    detect_standard,
    extensions_default,
    info_strings,
)

MSVC_C = {
    "_MSC_VER": 1929,
    "_MSC_FULL_VER": 192930159,
    "_MSC_BUILD": 0,
    "_WIN32": 1,
    "_M_X64": 100,
}

MSVC_CXX = dict(MSVC_C, _MSVC_LANG="201402L", __cplusplus="199711L")


def test_msvc_c_defaults_to_c90():
    assert detect_standard(MSVC_C, Language.C) == "90"


def test_msvc_cxx_defaults_to_cxx14():
    assert detect_standard(MSVC_CXX, Language.CXX) == "14"


def test_msvc_has_extensions_off():
    assert extensions_default(MSVC_C) == "OFF"


def test_unknown_c_compiler_without_stdc_gives_empty():
    assert detect_standard({}, Language.C) == ""


def test_clang_without_stdc_version_is_c90():
    assert detect_standard({"__clang__": 1}, Language.C) == "90"


@pytest.mark.parametrize(
    "stdc_version, expected",
    [
        ("199409L", "90"),
        ("199901L", "99"),
        ("201112L", "11"),
        ("201710L", "17"),
        ("202311L", "23"),
    ],
)
def test_c_standard_from_stdc_version(stdc_version, expected):
    macros = {"__GNUC__": 13, "__STDC__": 1, "__STDC_VERSION__": stdc_version}
    assert detect_standard(macros, Language.C) == expected


@pytest.mark.parametrize(
    "cplusplus, expected",
    [
        (199711, "98"),
        (201103, "11"),
        (201402, "14"),
        (201703, "17"),
        (202002, "20"),
        (202302, "23"),
    ],
)
def test_cxx_standard_from_cplusplus(cplusplus, expected):
    macros = {"__GNUC__": 13, "__cplusplus": cplusplus}
    assert detect_standard(macros, Language.CXX) == expected


def test_old_gxx_experimental_mode_is_cxx11():
    macros = {"__GNUC__": 4, "__cplusplus": 1, "__GXX_EXPERIMENTAL_CXX0X__": 1}
    assert detect_standard(macros, Language.CXX) == "11"


def test_nvhpc_with_paren_init_is_cxx20():
    macros = {"__NVCOMPILER": 1, "__cplusplus": 201703, "__cpp_aggregate_paren_init": 1}
    assert detect_standard(macros, Language.CXX) == "20"


def test_intel_on_windows_uses_msvc_lang():
    macros = {
        "__INTEL_COMPILER": 1910,
        "_MSVC_LANG": 201703,
        "__cplusplus": 199711,
        "__cpp_aggregate_paren_init": 1,
    }
    assert detect_standard(macros, Language.CXX) == "20"


def test_intel_cxx11_mode_without_msvc_lang_value_above_14():
    macros = {"__INTEL_COMPILER": 1910, "_MSVC_LANG": 201103, "__INTEL_CXX11_MODE__": 1}
    assert detect_standard(macros, Language.CXX) == "11"


def test_msvc_takes_larger_of_msvc_lang_and_cplusplus():
    low = dict(MSVC_CXX, _MSVC_LANG=201703)
    assert detect_standard(low, Language.CXX) == "17"


def test_gnu_has_extensions_on():
    assert extensions_default({"__GNUC__": 13}) == "ON"


def test_strict_ansi_turns_extensions_off():
    assert extensions_default({"__GNUC__": 13, "__STRICT_ANSI__": 1}) == "OFF"


def test_msvc_info_strings():
    lines = info_strings(MSVC_C, Language.C)
    assert lines[0] == "INFO:compiler[MSVC]"
    assert "INFO:platform[Windows]" in lines
    assert "INFO:arch[x64]" in lines
    assert lines[-2] == "INFO:standard_default[90]"
    assert lines[-1] == "INFO:extensions_default[OFF]"


def test_msvc_version_string_holds_encoded_components():
    lines = info_strings(MSVC_C, Language.C)
    versions = [line for line in lines if line.startswith("INFO:compiler_version[")]
    assert len(versions) == 1
    inner = versions[0][len("INFO:compiler_version["):-1]
    assert [int(part) for part in inner.split(".")] == [19, 29, 30159, 0]


def test_all_strings_have_info_prefix_and_brackets():
    for line in info_strings(MSVC_CXX, Language.CXX):
        assert line.startswith("INFO:")
        assert line.endswith("]")


def test_clang_simulating_msvc_reports_simulate_lines():
    macros = {
        "__clang__": 1,
        "__clang_major__": 16,
        "__clang_minor__": 0,
        "__clang_patchlevel__": 0,
        "_MSC_VER": 1929,
    }
    lines = info_strings(macros, Language.C)
    assert "INFO:simulate[MSVC]" in lines
    assert any(line.startswith("INFO:simulate_version[") for line in lines)


def test_unknown_compiler_reports_empty_fields():
    lines = info_strings({}, Language.C)
    assert lines == [
        "INFO:compiler[]",
        "INFO:platform[]",
        "INFO:arch[]",
        "INFO:standard_default[]",
        "INFO:extensions_default[OFF]",
    ]


def test_qnx_and_cray_markers():
    lines = info_strings({"__QNXNTO__": 1, "__CRAYXT_COMPUTE_LINUX_TARGET": 1}, Language.C)
    assert "INFO:qnxnto[]" in lines
    assert "INFO:compiler_wrapper[CrayPrgEnv]" in lines
    assert "INFO:platform[QNX]" in lines


def test_fujitsu_text_version_is_used_verbatim():
    macros = {"__FUJITSU": 1, "__FCC_version__": "4.5.0"}
    lines = info_strings(macros, Language.C)
    assert "INFO:compiler_version[4.5.0]" in lines


def test_non_numeric_msvc_lang_raises():
    with pytest.raises(ValueError):
        detect_standard(dict(MSVC_CXX, _MSVC_LANG="latest"), Language.CXX)