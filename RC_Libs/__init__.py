"""
RC_Libs - Redact Canvas Library Modules

This package contains core functionality for the Redact Canvas project,
organized into specialized sub-packages:

- ImageEditingLib: Pixel buffer models, blur engines, ingest/export and the editor window
- InteractionLib: Pointer-driven state machines and the input dispatcher
"""

__version__ = "0.1.0"
