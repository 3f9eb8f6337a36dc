"""
OT_Libs - Open Transform Library Modules

This package contains core functionality for the Open Transform project,
organized into specialized sub-packages:

- ImageEditingLib: Edit state, rendering and export of a single image
- FileIOLib: Upload validation and source image decoding
- SessionLib: Editor session, PDF placeholder and view routing
"""

__version__ = "0.1.0"
