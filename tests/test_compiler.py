import pytest

from pixelrunner.toolchain.compiler import (
    CompilerInfo,
    Language,
    detect_compiler,
    encode_dec,
    encode_hex,
)


def _parsed(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in version.split("."))


def test_encode_dec_pads_to_eight_digits():
    assert encode_dec(19) == "00000019"


@pytest.mark.parametrize("n", [0, 1, 29, 30159, 99999999])
def test_encode_dec_round_trips(n):
    encoded = encode_dec(n)
    assert len(encoded) == 8
    assert int(encoded) == n


def test_encode_dec_keeps_lowest_eight_digits():
    assert encode_dec(10 ** 8 + 42) == encode_dec(42)


@pytest.mark.parametrize("n", [0, 0x5100, 0x1234, 0x98765432])
def test_encode_hex_round_trips_for_decimal_nibbles(n):
    encoded = encode_hex(n)
    assert len(encoded) == 8
    assert int(encoded, 16) == n


def test_encode_hex_nibble_above_nine_follows_digit_nine():
    assert encode_hex(0xA)[-1] == chr(ord("9") + 1)


def test_encode_hex_uses_low_32_bits():
    assert encode_hex((1 << 32) + 0x17) == encode_hex(0x17)


@pytest.mark.parametrize("encoder", [encode_dec, encode_hex])
def test_encoders_reject_negative(encoder):
    with pytest.raises(ValueError):
        encoder(-1)


def test_msvc_version_from_full_version():
    info = detect_compiler(
        {"_MSC_VER": 1929, "_MSC_FULL_VER": 192930159, "_WIN32": 1}, Language.CXX
    )
    assert info.id == "MSVC"
    assert info.simulate_id is None
    assert _parsed(info.version_string) == (19, 29, 30159)
    assert info.version_tweak is None


def test_msvc_accepts_string_macro_values():
    info = detect_compiler({"_MSC_VER": "1929"})
    assert info.id == "MSVC"
    assert _parsed(info.version_string) == (19, 29)


def test_gnu_version():
    info = detect_compiler(
        {"__GNUC__": 13, "__GNUC_MINOR__": 2, "__GNUC_PATCHLEVEL__": 0}, Language.C
    )
    assert info.id == "GNU"
    assert _parsed(info.version_string) == (13, 2, 0)


def test_gnug_only_is_gnu_for_cxx_but_unknown_for_c():
    macros = {"__GNUG__": 12}
    assert detect_compiler(macros, Language.CXX).id == "GNU"
    assert _parsed(detect_compiler(macros, Language.CXX).version_string) == (12,)
    assert detect_compiler(macros, Language.C).id == ""


def test_clang_simulating_msvc():
    info = detect_compiler(
        {
            "__clang__": True,
            "__clang_major__": 17,
            "__clang_minor__": 0,
            "__clang_patchlevel__": 1,
            "_MSC_VER": 1929,
            "__GNUC__": 4,
        }
    )
    assert info.id == "Clang"
    assert info.simulate_id == "MSVC"
    assert _parsed(info.version_string) == (17, 0, 1)
    assert _parsed(info.simulate_version_string) == (19, 29)


def test_apple_clang_has_tweak():
    info = detect_compiler(
        {
            "__clang__": 1,
            "__apple_build_version__": 15000040,
            "__clang_major__": 15,
            "__clang_minor__": 0,
            "__clang_patchlevel__": 0,
        }
    )
    assert info.id == "AppleClang"
    assert _parsed(info.version_string) == (15, 0, 0, 15000040)


def test_intel_takes_precedence_and_simulates_gnu():
    info = detect_compiler(
        {"__INTEL_COMPILER": 1910, "__INTEL_COMPILER_UPDATE": 3, "__GNUC__": 9}
    )
    assert info.id == "Intel"
    assert info.simulate_id == "GNU"
    assert _parsed(info.version_string) == (19, 1, 3)
    assert _parsed(info.simulate_version_string) == (9,)


@pytest.mark.parametrize(
    "macros",
    [{"__TINYC__": 1}, {"__BCC__": 1}, {"SDCC": 420}],
)
def test_c_only_compilers_unknown_in_cxx(macros):
    assert detect_compiler(macros, Language.C).id != ""
    assert detect_compiler(macros, Language.CXX).id == ""


def test_sunpro_macro_depends_on_language():
    assert detect_compiler({"__SUNPRO_C": 0x5150}, Language.C).id == "SunPro"
    assert detect_compiler({"__SUNPRO_C": 0x5150}, Language.CXX).id == ""
    info = detect_compiler({"__SUNPRO_CC": 0x5150}, Language.CXX)
    assert info.id == "SunPro"
    assert info.version_major == encode_hex(0x5)


def test_fujitsu_text_version():
    info = detect_compiler({"__FUJITSU": 1, "__FCC_version__": "4.5.0"})
    assert info.id == "Fujitsu"
    assert info.version_string == "4.5.0"


def test_cray_clang_internal_version_text():
    info = detect_compiler(
        {
            "__clang__": 1,
            "__cray__": 1,
            "__cray_major__": 16,
            "__cray_minor__": 0,
            "__cray_patchlevel__": 1,
            "__clang_version__": "16.0.1 (cray)",
        }
    )
    assert info.id == "CrayClang"
    assert info.internal_version_string == "16.0.1 (cray)"


def test_hpux_fallback():
    assert detect_compiler({"__hpux": 1}).id == "HP"


def test_unknown_compiler():
    info = detect_compiler({})
    assert info == CompilerInfo()
    assert info.id == ""
    assert info.version_string is None
    assert info.simulate_version_string is None


def test_missing_required_macro_raises():
    with pytest.raises(ValueError):
        detect_compiler({"__PATHCC__": 5})


def test_non_numeric_macro_raises():
    with pytest.raises(ValueError):
        detect_compiler({"_MSC_VER": "nineteen"})


def test_version_string_stops_at_first_missing_component():
    info = CompilerInfo(id="X", version_major="1", version_patch="3")
    assert info.version_string == "1"