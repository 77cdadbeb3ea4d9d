"""
npminspector: static heuristic malware scanner for installed npm packages.
"""

__version__ = "1.0.0"
