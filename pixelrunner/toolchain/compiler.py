"""Compiler identification from the set of predefined preprocessor macros.

Version components are kept in the encoded form the identification
probe emits: ``encode_dec`` gives eight decimal digits and ``encode_hex``
gives eight nibble digits, so downstream tools can read them back.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

MacroValue = Union[int, str, bool]

_DEC_WIDTH = 8


class Language(Enum):
    """The language whose compiler is being identified."""

    C = "C"
    CXX = "CXX"


def encode_dec(n: int) -> str:
    """Encode ``n`` as eight decimal digits (its lowest eight digits, zero padded)."""
    if n < 0:
        raise ValueError(f"cannot encode negative value {n}")
    return f"{n % 10 ** _DEC_WIDTH:0{_DEC_WIDTH}d}"


def encode_hex(n: int) -> str:
    """Encode the low 32 bits of ``n`` as eight nibbles, each offset from '0'.

    Nibbles above 9 map to the characters following '9' (':' for 10 and so on).
    """
    if n < 0:
        raise ValueError(f"cannot encode negative value {n}")
    return "".join(chr(ord("0") + ((n >> shift) & 0xF)) for shift in range(28, -1, -4))


@dataclass
class CompilerInfo:
    """What the identification probe reports about a compiler."""

    id: str = ""
    version_major: Optional[str] = None
    version_minor: Optional[str] = None
    version_patch: Optional[str] = None
    version_tweak: Optional[str] = None
    version: Optional[str] = None
    version_internal: Optional[str] = None
    version_internal_str: Optional[str] = None
    simulate_id: Optional[str] = None
    simulate_version_major: Optional[str] = None
    simulate_version_minor: Optional[str] = None
    simulate_version_patch: Optional[str] = None
    simulate_version_tweak: Optional[str] = None

    @property
    def version_string(self) -> Optional[str]:
        """The dotted compiler version, or None if the compiler gives none."""
        if self.version is not None:
            return self.version
        return _join_components(
            self.version_major, self.version_minor, self.version_patch, self.version_tweak
        )

    @property
    def internal_version_string(self) -> Optional[str]:
        """The internal version, encoded or textual, if any."""
        if self.version_internal is not None:
            return self.version_internal
        return self.version_internal_str

    @property
    def simulate_version_string(self) -> Optional[str]:
        """The dotted version of the simulated compiler, if any."""
        return _join_components(
            self.simulate_version_major,
            self.simulate_version_minor,
            self.simulate_version_patch,
            self.simulate_version_tweak,
        )


def _join_components(
    major: Optional[str], minor: Optional[str], patch: Optional[str], tweak: Optional[str]
) -> Optional[str]:
    if major is None:
        return None
    parts = [major]
    for component in (minor, patch, tweak):
        if component is None:
            break
        parts.append(component)
    return ".".join(parts)


class _Macros:
    """Read access to predefined macros with preprocessor semantics."""

    def __init__(self, macros: Mapping[str, MacroValue]) -> None:
        self._macros = macros

    def defined(self, *names: str) -> bool:
        return any(name in self._macros for name in names)

    def cond(self, name: str) -> int:
        """Value in an ``#if`` expression: undefined names count as 0."""
        if name not in self._macros:
            return 0
        return self.value(name)

    def value(self, name: str) -> int:
        """Numeric value of a macro that must be defined."""
        try:
            raw = self._macros[name]
        except KeyError:
            raise ValueError(f"macro {name} is required but not defined") from None
        if isinstance(raw, bool):
            return int(raw)
        if isinstance(raw, int):
            return raw
        try:
            return int(str(raw).strip().rstrip("uUlL"), 0)
        except ValueError:
            raise ValueError(f"macro {name} has non-numeric value {raw!r}") from None

    def text(self, name: str) -> str:
        try:
            return str(self._macros[name])
        except KeyError:
            raise ValueError(f"macro {name} is required but not defined") from None


def _set_version(info: CompilerInfo, major=None, minor=None, patch=None, tweak=None) -> None:
    if major is not None:
        info.version_major = major
    if minor is not None:
        info.version_minor = minor
    if patch is not None:
        info.version_patch = patch
    if tweak is not None:
        info.version_tweak = tweak


def _simulate_msvc_version(info: CompilerInfo, m: _Macros) -> None:
    if m.defined("_MSC_VER"):
        msc = m.value("_MSC_VER")
        info.simulate_version_major = encode_dec(msc // 100)
        info.simulate_version_minor = encode_dec(msc % 100)


def _simulate_gnu_version(info: CompilerInfo, m: _Macros) -> None:
    if m.defined("__GNUC__"):
        info.simulate_version_major = encode_dec(m.value("__GNUC__"))
    elif m.defined("__GNUG__"):
        info.simulate_version_major = encode_dec(m.value("__GNUG__"))
    if m.defined("__GNUC_MINOR__"):
        info.simulate_version_minor = encode_dec(m.value("__GNUC_MINOR__"))
    if m.defined("__GNUC_PATCHLEVEL__"):
        info.simulate_version_patch = encode_dec(m.value("__GNUC_PATCHLEVEL__"))


def _vrp(info: CompilerInfo, v: int) -> None:
    _set_version(info, encode_dec(v // 100), encode_dec(v // 10 % 10), encode_dec(v % 10))


def _optional_dec(m: _Macros, name: str) -> Optional[str]:
    return encode_dec(m.value(name)) if m.defined(name) else None


def _intel(info: CompilerInfo, m: _Macros) -> None:
    info.id = "Intel"
    if m.defined("_MSC_VER"):
        info.simulate_id = "MSVC"
    if m.defined("__GNUC__"):
        info.simulate_id = "GNU"
    ic = m.cond("__INTEL_COMPILER")
    if ic < 2021 or ic in (202110, 202111):
        v = m.value("__INTEL_COMPILER")
        if m.defined("__INTEL_COMPILER_UPDATE"):
            patch = encode_dec(m.value("__INTEL_COMPILER_UPDATE"))
        else:
            patch = encode_dec(v % 10)
        _set_version(info, encode_dec(v // 100), encode_dec(v // 10 % 10), patch)
    else:
        _set_version(
            info,
            encode_dec(m.value("__INTEL_COMPILER")),
            encode_dec(m.value("__INTEL_COMPILER_UPDATE")),
            encode_dec(0),
        )
    _set_version(info, tweak=_optional_dec(m, "__INTEL_COMPILER_BUILD_DATE"))
    _simulate_msvc_version(info, m)
    _simulate_gnu_version(info, m)


def _intel_llvm(info: CompilerInfo, m: _Macros) -> None:
    info.id = "IntelLLVM"
    if m.defined("_MSC_VER"):
        info.simulate_id = "MSVC"
    if m.defined("__GNUC__"):
        info.simulate_id = "GNU"
    if m.cond("__INTEL_LLVM_COMPILER") < 1000000:
        _vrp(info, m.value("__INTEL_LLVM_COMPILER"))
    else:
        v = m.value("__INTEL_LLVM_COMPILER")
        _set_version(
            info, encode_dec(v // 10000), encode_dec(v // 100 % 100), encode_dec(v % 100)
        )
    _simulate_msvc_version(info, m)
    _simulate_gnu_version(info, m)


def _clang_like(info: CompilerInfo, m: _Macros, name: str) -> None:
    info.id = name
    if m.defined("_MSC_VER"):
        info.simulate_id = "MSVC"
    _set_version(
        info,
        encode_dec(m.value("__clang_major__")),
        encode_dec(m.value("__clang_minor__")),
        encode_dec(m.value("__clang_patchlevel__")),
    )
    _simulate_msvc_version(info, m)


def _named_components(info: CompilerInfo, m: _Macros, *names: str) -> None:
    _set_version(info, *(encode_dec(m.value(name)) for name in names))


def detect_compiler(
    macros: Mapping[str, MacroValue], language: Language = Language.C
) -> CompilerInfo:
    """Identify the compiler whose predefined macros are ``macros``.

    Macros given as ``True`` count as defined to 1. An unknown compiler
    gives an empty ``id``. Raises ValueError when a macro the detected
    compiler's version needs is missing or not numeric.
    """
    m = _Macros(macros)
    d = m.defined
    cxx = language is Language.CXX
    info = CompilerInfo()

    sunpro = "__SUNPRO_CC" if cxx else "__SUNPRO_C"
    hp = "__HP_aCC" if cxx else "__HP_cc"
    decc, decc_ver = ("__DECCXX", "__DECCXX_VER") if cxx else ("__DECC", "__DECC_VER")
    ibm = "__IBMCPP__" if cxx else "__IBMC__"

    if d("__INTEL_COMPILER", "__ICC"):
        _intel(info, m)
    elif (d("__clang__") and d("__INTEL_CLANG_COMPILER")) or d("__INTEL_LLVM_COMPILER"):
        _intel_llvm(info, m)
    elif d("__PATHCC__"):
        info.id = "PathScale"
        _named_components(info, m, "__PATHCC__", "__PATHCC_MINOR__")
        _set_version(info, patch=_optional_dec(m, "__PATHCC_PATCHLEVEL__"))
    elif d("__BORLANDC__") and d("__CODEGEARC_VERSION__"):
        info.id = "Embarcadero"
        v = m.value("__CODEGEARC_VERSION__")
        _set_version(
            info, encode_hex(v >> 24 & 0xFF), encode_hex(v >> 16 & 0xFF), encode_dec(v & 0xFFFF)
        )
    elif d("__BORLANDC__"):
        info.id = "Borland"
        v = m.value("__BORLANDC__")
        _set_version(info, encode_hex(v >> 8), encode_hex(v & 0xFF))
    elif d("__WATCOMC__") and m.cond("__WATCOMC__") < 1200:
        info.id = "Watcom"
        v = m.value("__WATCOMC__")
        _set_version(info, encode_dec(v // 100), encode_dec(v // 10 % 10))
        if v % 10 > 0:
            _set_version(info, patch=encode_dec(v % 10))
    elif d("__WATCOMC__"):
        info.id = "OpenWatcom"
        v = m.value("__WATCOMC__")
        _set_version(info, encode_dec((v - 1100) // 100), encode_dec(v // 10 % 10))
        if v % 10 > 0:
            _set_version(info, patch=encode_dec(v % 10))
    elif d(sunpro):
        info.id = "SunPro"
        v = m.value(sunpro)
        if v >= 0x5100:
            _set_version(info, encode_hex(v >> 12), encode_hex(v >> 4 & 0xFF), encode_hex(v & 0xF))
        else:
            _set_version(info, encode_hex(v >> 8), encode_hex(v >> 4 & 0xF), encode_hex(v & 0xF))
    elif d(hp):
        info.id = "HP"
        v = m.value(hp)
        _set_version(info, encode_dec(v // 10000), encode_dec(v // 100 % 100), encode_dec(v % 100))
    elif d(decc):
        info.id = "Compaq"
        v = m.value(decc_ver)
        _set_version(
            info, encode_dec(v // 10000000), encode_dec(v // 100000 % 100), encode_dec(v % 10000)
        )
    elif d(ibm) and d("__COMPILER_VER__"):
        info.id = "zOS"
        _vrp(info, m.value(ibm))
    elif d("__open_xl__") and d("__clang__"):
        info.id = "IBMClang"
        _named_components(
            info, m, "__open_xl_version__", "__open_xl_release__",
            "__open_xl_modification__", "__open_xl_ptf_fix_level__",
        )
        info.version_internal_str = m.text("__clang_version__")
    elif d("__ibmxl__") and d("__clang__"):
        info.id = "XLClang"
        _named_components(
            info, m, "__ibmxl_version__", "__ibmxl_release__",
            "__ibmxl_modification__", "__ibmxl_ptf_fix_level__",
        )
    elif d(ibm) and not d("__COMPILER_VER__") and m.cond(ibm) >= 800:
        info.id = "XL"
        _vrp(info, m.value(ibm))
    elif d(ibm) and not d("__COMPILER_VER__") and m.cond(ibm) < 800:
        info.id = "VisualAge"
        _vrp(info, m.value(ibm))
    elif d("__NVCOMPILER"):
        info.id = "NVHPC"
        _named_components(info, m, "__NVCOMPILER_MAJOR__", "__NVCOMPILER_MINOR__")
        _set_version(info, patch=_optional_dec(m, "__NVCOMPILER_PATCHLEVEL__"))
    elif d("__PGI"):
        info.id = "PGI"
        _named_components(info, m, "__PGIC__", "__PGIC_MINOR__")
        _set_version(info, patch=_optional_dec(m, "__PGIC_PATCHLEVEL__"))
    elif d("__clang__") and d("__cray__"):
        info.id = "CrayClang"
        _named_components(info, m, "__cray_major__", "__cray_minor__", "__cray_patchlevel__")
        info.version_internal_str = m.text("__clang_version__")
    elif d("_CRAYC"):
        info.id = "Cray"
        _named_components(info, m, "_RELEASE_MAJOR", "_RELEASE_MINOR")
    elif d("__TI_COMPILER_VERSION__"):
        info.id = "TI"
        v = m.value("__TI_COMPILER_VERSION__")
        _set_version(
            info, encode_dec(v // 1000000), encode_dec(v // 1000 % 1000), encode_dec(v % 1000)
        )
    elif d("__CLANG_FUJITSU"):
        info.id = "FujitsuClang"
        _named_components(info, m, "__FCC_major__", "__FCC_minor__", "__FCC_patchlevel__")
        info.version_internal_str = m.text("__clang_version__")
    elif d("__FUJITSU"):
        info.id = "Fujitsu"
        if d("__FCC_version__"):
            info.version = m.text("__FCC_version__")
        elif d("__FCC_major__"):
            _named_components(info, m, "__FCC_major__", "__FCC_minor__", "__FCC_patchlevel__")
        if d("__fcc_version"):
            info.version_internal = encode_dec(m.value("__fcc_version"))
        elif d("__FCC_VERSION"):
            info.version_internal = encode_dec(m.value("__FCC_VERSION"))
    elif d("__ghs__"):
        info.id = "GHS"
        if d("__GHS_VERSION_NUMBER"):
            _vrp(info, m.value("__GHS_VERSION_NUMBER"))
    elif d("__TASKING__"):
        info.id = "Tasking"
        v = m.value("__VERSION__")
        _set_version(info, encode_dec(v // 1000), encode_dec(v % 100))
        info.version_internal = encode_dec(v)
    elif d("__ORANGEC__"):
        info.id = "OrangeC"
        _named_components(info, m, "__ORANGEC_MAJOR__", "__ORANGEC_MINOR__", "__ORANGEC_PATCHLEVEL__")
    elif d("__RENESAS__"):
        info.id = "Renesas"
        v = m.value("__RENESAS_VERSION__")
        _set_version(
            info, encode_hex(v >> 24 & 0xFF), encode_hex(v >> 16 & 0xFF), encode_hex(v >> 8 & 0xFF)
        )
    elif not cxx and d("__TINYC__"):
        info.id = "TinyCC"
    elif not cxx and d("__BCC__"):
        info.id = "Bruce"
    elif d("__SCO_VERSION__"):
        info.id = "SCO"
    elif d("__ARMCC_VERSION") and not d("__clang__"):
        info.id = "ARMCC"
        v = m.value("__ARMCC_VERSION")
        if v >= 1000000:
            _set_version(
                info, encode_dec(v // 1000000), encode_dec(v // 10000 % 100), encode_dec(v % 10000)
            )
        else:
            _set_version(
                info, encode_dec(v // 100000), encode_dec(v // 10000 % 10), encode_dec(v % 10000)
            )
    elif d("__clang__") and d("__apple_build_version__"):
        _clang_like(info, m, "AppleClang")
        _set_version(info, tweak=encode_dec(m.value("__apple_build_version__")))
    elif d("__clang__") and d("__ARMCOMPILER_VERSION"):
        info.id = "ARMClang"
        v = m.value("__ARMCOMPILER_VERSION")
        _set_version(
            info, encode_dec(v // 1000000), encode_dec(v // 10000 % 100), encode_dec(v // 100 % 100)
        )
        info.version_internal = encode_dec(v)
    elif d("__clang__") and d("__ti__"):
        info.id = "TIClang"
        _named_components(info, m, "__ti_major__", "__ti_minor__", "__ti_patchlevel__")
        info.version_internal = encode_dec(m.value("__ti_version__"))
    elif d("__clang__"):
        _clang_like(info, m, "Clang")
    elif d("__LCC__") and d("__GNUC__", "__GNUG__", "__MCST__"):
        info.id = "LCC"
        v = m.value("__LCC__")
        _set_version(info, encode_dec(v // 100), encode_dec(v % 100))
        _set_version(info, patch=_optional_dec(m, "__LCC_MINOR__"))
        if d("__GNUC__") and d("__GNUC_MINOR__"):
            info.simulate_id = "GNU"
            info.simulate_version_major = encode_dec(m.value("__GNUC__"))
            info.simulate_version_minor = encode_dec(m.value("__GNUC_MINOR__"))
            info.simulate_version_patch = _optional_dec(m, "__GNUC_PATCHLEVEL__")
    elif d("__GNUC__") or (cxx and d("__GNUG__")):
        info.id = "GNU"
        major = "__GNUC__" if d("__GNUC__") else "__GNUG__"
        _set_version(info, encode_dec(m.value(major)))
        _set_version(info, minor=_optional_dec(m, "__GNUC_MINOR__"))
        _set_version(info, patch=_optional_dec(m, "__GNUC_PATCHLEVEL__"))
    elif d("_MSC_VER"):
        info.id = "MSVC"
        v = m.value("_MSC_VER")
        _set_version(info, encode_dec(v // 100), encode_dec(v % 100))
        if d("_MSC_FULL_VER"):
            full = m.value("_MSC_FULL_VER")
            modulus = 100000 if v >= 1400 else 10000
            _set_version(info, patch=encode_dec(full % modulus))
        _set_version(info, tweak=_optional_dec(m, "_MSC_BUILD"))
    elif d("_ADI_COMPILER"):
        info.id = "ADSP"
        if d("__VERSIONNUM__"):
            v = m.value("__VERSIONNUM__")
            _set_version(
                info,
                encode_dec(v >> 24 & 0xFF),
                encode_dec(v >> 16 & 0xFF),
                encode_dec(v >> 8 & 0xFF),
                encode_dec(v & 0xFF),
            )
    elif d("__IAR_SYSTEMS_ICC__", "__IAR_SYSTEMS_ICC"):
        info.id = "IAR"
        iar_targets = (
            "__ICCAVR__", "__ICCRX__", "__ICCRH850__", "__ICCRL78__", "__ICC430__",
            "__ICCRISCV__", "__ICCV850__", "__ICC8051__", "__ICCSTM8__",
        )
        if d("__VER__") and d("__ICCARM__"):
            v = m.value("__VER__")
            _set_version(
                info, encode_dec(v // 1000000), encode_dec(v // 1000 % 1000), encode_dec(v % 1000)
            )
            info.version_internal = encode_dec(m.value("__IAR_SYSTEMS_ICC__"))
        elif d("__VER__") and d(*iar_targets):
            v = m.value("__VER__")
            _set_version(
                info,
                encode_dec(v // 100),
                encode_dec(v - (v // 100) * 100),
                encode_dec(m.value("__SUBVERSION__")),
            )
            info.version_internal = encode_dec(m.value("__IAR_SYSTEMS_ICC__"))
    elif d("__DCC__") and d("_DIAB_TOOL"):
        info.id = "Diab"
        _named_components(
            info, m, "__VERSION_MAJOR_NUMBER__", "__VERSION_MINOR_NUMBER__",
            "__VERSION_ARCH_FEATURE_NUMBER__", "__VERSION_BUG_FIX_NUMBER__",
        )
    elif not cxx and d("__SDCC_VERSION_MAJOR", "SDCC"):
        info.id = "SDCC"
        if d("__SDCC_VERSION_MAJOR"):
            _named_components(
                info, m, "__SDCC_VERSION_MAJOR", "__SDCC_VERSION_MINOR", "__SDCC_VERSION_PATCH"
            )
        else:
            _vrp(info, m.value("SDCC"))
    elif d("__hpux", "__hpua"):
        info.id = "HP"

    return info