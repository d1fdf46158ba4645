"""
Core Package.

Contains the typings generation pipeline:
- Exported locals extraction
- Name derivation and declaration rendering
- Formatting (banner, prettier, line endings) and persistence
- The loader entry point tying them together
"""
