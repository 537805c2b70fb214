"""
Construction Task Wizard

Rule-based project intake that turns a short conversation into a ranked,
estimated construction task plan.
"""

__version__ = "0.1.0"
