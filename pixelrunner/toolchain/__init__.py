"""Compiler, platform and language-standard identification from predefined macros."""