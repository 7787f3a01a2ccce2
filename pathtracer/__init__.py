"""
Progressive Monte Carlo path tracer for scenes of spheres
"""
__version__ = "1.0.0"
