"""
Name: powercat
Description: a cat with line numbering, blank squeezing and visible tabs and ends
License: perl
"""

__version__ = "1.0"
