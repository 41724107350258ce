"""Language standard detection and the full set of identification strings.

The strings returned by :func:`info_strings` have the ``INFO:key[value]``
form that build tools scan the identification probe's output for.
"""

from __future__ import annotations

from collections.abc import Mapping

from pixelrunner.toolchain.compiler import (
    CompilerInfo,
    Language,
    MacroValue,
    _Macros,
    detect_compiler,
)
from pixelrunner.toolchain.platform import detect_architecture, detect_platform

C_STD_99 = 199901
C_STD_11 = 201112
C_STD_17 = 201710
C_STD_23 = 202311

CXX_STD_98 = 199711
CXX_STD_11 = 201103
CXX_STD_14 = 201402
CXX_STD_17 = 201703
CXX_STD_20 = 202002
CXX_STD_23 = 202302

_EXTENSION_COMPILERS = (
    "__clang__",
    "__GNUC__",
    "__xlC__",
    "__TI_COMPILER_VERSION__",
    "__RENESAS__",
)


def _c_standard(m: _Macros) -> str:
    if not m.defined("__STDC__") and not m.defined("__clang__") and not m.defined("__RENESAS__"):
        if m.defined("_MSC_VER", "__ibmxl__", "__IBMC__"):
            return "90"
        return ""
    std = m.cond("__STDC_VERSION__")
    if std > C_STD_17:
        return "23"
    if std > C_STD_11:
        return "17"
    if std > C_STD_99:
        return "11"
    if std >= C_STD_99:
        return "99"
    return "90"


def _cxx_std_value(m: _Macros) -> int:
    d = m.defined
    cplusplus = m.cond("__cplusplus")
    if d("__INTEL_COMPILER") and d("_MSVC_LANG"):
        lang = m.value("_MSVC_LANG")
        if lang > CXX_STD_17:
            return lang
        if lang == CXX_STD_17 and d("__cpp_aggregate_paren_init"):
            return CXX_STD_20
        if lang > CXX_STD_14 and cplusplus > CXX_STD_17:
            return CXX_STD_20
        if lang > CXX_STD_14:
            return CXX_STD_17
        if d("__INTEL_CXX11_MODE__") and d("__cpp_aggregate_nsdmi"):
            return CXX_STD_14
        if d("__INTEL_CXX11_MODE__"):
            return CXX_STD_11
        return CXX_STD_98
    if d("_MSC_VER") and d("_MSVC_LANG"):
        lang = m.value("_MSVC_LANG")
        return lang if lang > cplusplus else cplusplus
    if d("__NVCOMPILER"):
        if cplusplus == CXX_STD_17 and d("__cpp_aggregate_paren_init"):
            return CXX_STD_20
        return cplusplus
    if d("__INTEL_COMPILER", "__PGI"):
        if cplusplus == CXX_STD_11 and d("__cpp_namespace_attributes"):
            return CXX_STD_17
        if cplusplus == CXX_STD_11 and d("__cpp_aggregate_nsdmi"):
            return CXX_STD_14
        return cplusplus
    if d("__IBMCPP__", "__ibmxl__") and d("__linux__"):
        if cplusplus == CXX_STD_11 and d("__cpp_aggregate_nsdmi"):
            return CXX_STD_14
        return cplusplus
    if cplusplus == 1 and d("__GXX_EXPERIMENTAL_CXX0X__"):
        return CXX_STD_11
    return cplusplus


def _cxx_standard(m: _Macros) -> str:
    std = _cxx_std_value(m)
    if std > CXX_STD_23:
        return "26"
    if std > CXX_STD_20:
        return "23"
    if std > CXX_STD_17:
        return "20"
    if std > CXX_STD_14:
        return "17"
    if std > CXX_STD_11:
        return "14"
    if std >= CXX_STD_11:
        return "11"
    return "98"


def detect_standard(macros: Mapping[str, MacroValue], language: Language = Language.C) -> str:
    """The default language standard, such as "17"; "" if a C compiler gives no clue."""
    m = _Macros(macros)
    if language is Language.CXX:
        return _cxx_standard(m)
    return _c_standard(m)


def extensions_default(macros: Mapping[str, MacroValue]) -> str:
    """"ON" if the compiler enables language extensions by default, else "OFF"."""
    m = _Macros(macros)
    if m.defined(*_EXTENSION_COMPILERS) and not m.defined("__STRICT_ANSI__"):
        return "ON"
    return "OFF"


def _info(key: str, value: str) -> str:
    return f"INFO:{key}[{value}]"


def _version_strings(info: CompilerInfo) -> list[str]:
    lines = []
    version = info.version_string
    if version is not None:
        lines.append(_info("compiler_version", version))
    internal = info.internal_version_string
    if internal is not None:
        lines.append(_info("compiler_version_internal", internal))
    simulate = info.simulate_version_string
    if simulate is not None:
        lines.append(_info("simulate_version", simulate))
    return lines


def info_strings(macros: Mapping[str, MacroValue], language: Language = Language.C) -> list[str]:
    """Every identification string the probe would embed, in declaration order."""
    m = _Macros(macros)
    info = detect_compiler(macros, language)
    lines = [_info("compiler", info.id)]
    if info.simulate_id is not None:
        lines.append(_info("simulate", info.simulate_id))
    if m.defined("__QNXNTO__"):
        lines.append(_info("qnxnto", ""))
    if m.defined("__CRAYXT_COMPUTE_LINUX_TARGET"):
        lines.append(_info("compiler_wrapper", "CrayPrgEnv"))
    lines.extend(_version_strings(info))
    lines.append(_info("platform", detect_platform(macros)))
    lines.append(_info("arch", detect_architecture(macros)))
    lines.append(_info("standard_default", detect_standard(macros, language)))
    lines.append(_info("extensions_default", extensions_default(macros)))
    return lines