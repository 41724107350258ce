# pixelrunner

Small building blocks for a side-scrolling game, and a set of helpers that
identify a C or C++ toolchain from its predefined preprocessor macros. The
package depends on nothing outside the standard library.

## Installing

```
pip install .
```

## Timing and animation

`pixelrunner.timer.Timer` is a repeating countdown driven by frame deltas.
`step(delta_time)` adds the elapsed time and returns `True` whenever the
timer's `length` is reached; the overshoot is kept rather than cleared, and the
`timeout` flag stays set until `reset()` is called.

```python
from pixelrunner.timer import Timer

cooldown = Timer(0.5)
cooldown.step(0.3)   # False
cooldown.step(0.3)   # True; cooldown.time is now about 0.1
cooldown.timeout     # True until cooldown.reset()
```

`pixelrunner.animation.Animation(frame_count, length)` is a looping sequence of
frames played over `length` seconds. `step(delta_time)` advances it,
`current_frame()` gives the index of the frame showing now, `length` is the
cycle duration, and `is_done()` is true once at least one full cycle has
played. `current_frame()` raises `ZeroDivisionError` for an animation of zero
length.

```python
from pixelrunner.animation import Animation

run = Animation(4, 1.0)
run.step(0.6)
run.current_frame()  # 2
run.is_done()        # False
```

## Toolchain identification

`pixelrunner.toolchain` works out a compiler's identity, target platform,
architecture and default language standard from a mapping of predefined macro
names to values (ints, numeric strings such as `"0x5100"` or `"201703L"`, or
`True` for "defined to 1").

- `pixelrunner.toolchain.compiler`
  - `Language` — `Language.C` or `Language.CXX`.
  - `detect_compiler(macros, language)` returns a `CompilerInfo` with the
    compiler `id` (empty if unknown), its version components, internal
    version and any simulated compiler. `version_string`,
    `internal_version_string` and `simulate_version_string` join them.
    Raises `ValueError` when a macro the detected compiler needs is missing
    or not numeric.
  - `encode_dec(n)` and `encode_hex(n)` give the eight-digit encodings the
    version components are kept in (`encode_dec(19) == "00000019"`).
- `pixelrunner.toolchain.platform`
  - `detect_platform(macros)` and `detect_architecture(macros)` return names
    such as `"Linux"` or `"x64"`, or `""` if they cannot be told.
- `pixelrunner.toolchain.report`
  - `detect_standard(macros, language)` gives the default standard, such as
    `"17"`.
  - `extensions_default(macros)` gives `"ON"` or `"OFF"`.
  - `info_strings(macros, language)` lists every `INFO:key[value]` string.

```python
from pixelrunner.toolchain.compiler import Language
from pixelrunner.toolchain.report import info_strings

macros = {
    "_MSC_VER": 1929,
    "_MSVC_LANG": 201402,
    "__cplusplus": 199711,
    "_WIN32": 1,
    "_M_X64": 1,
}
for line in info_strings(macros, Language.CXX):
    print(line)
# INFO:compiler[MSVC]
# INFO:compiler_version[00000019.00000029]
# INFO:platform[Windows]
# INFO:arch[x64]
# INFO:standard_default[14]
# INFO:extensions_default[OFF]
```

## What this package does not do

There is no playable game here: no window, no drawing, no input handling, no
level, player, enemy or bullet logic, and no command to start anything. The
package offers only the timer and animation pieces such a game is built from,
and the toolchain helpers above, which read macro mappings you supply rather
than running a compiler.

## Running the tests

```
pip install .[test]
pytest
```