"""
IronForge: configurator back-end for fabricated iron gates/grills and
aluminium windows.

Dimensions + profile choices in, material weight, area, hardware and a
priced quotation out.
"""

__version__ = "1.0.0"
