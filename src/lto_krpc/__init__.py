"""
lto_krpc

Launch a vessel into a circular low orbit over kRPC: gravity turn, booster
separation, apoapsis targeting, coast, and a planned circularization burn.
"""

__version__ = '0.1.0'
