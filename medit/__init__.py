"""Building blocks of a small Emacs-style text editor: line store, file I/O, init files, key tables and macros."""

__version__ = "2.10.0"