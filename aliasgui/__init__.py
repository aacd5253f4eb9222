"""aliasgui - manage shell aliases inside your shell startup file"""

__version__ = "0.1.0"
