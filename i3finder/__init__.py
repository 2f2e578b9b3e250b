"""
i3finder

Pick an i3/sway window or workspace through a dmenu-style picker, then focus
it, pull the active window into it, or jump back to the previous focus.
"""

__version__ = "1.0.0"
__author__ = "NixOS Configuration Team"
