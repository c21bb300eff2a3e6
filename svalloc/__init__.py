"""
holds submodules related to assigning structural variant evidence to breakpoint calls
"""
__version__ = '0.1.0'
