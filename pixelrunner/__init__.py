"""Frame timers and sprite animation for a side-scrolling game, plus toolchain identification."""

__version__ = "0.1.0"